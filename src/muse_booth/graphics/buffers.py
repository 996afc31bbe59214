# Project MUSE - buffers.py
# RGBA Frame Buffer helpers shared by every pipeline stage
# (C) 2025 MUSE Corp. All rights reserved.

"""
Frame buffer helpers.

A frame buffer is an (H, W, 4) uint8 numpy array in RGBA order. Video frames,
backgrounds, masks (alpha only) and composited outputs all use this layout,
so stages can hand buffers to each other without conversion.
"""

import cv2
import numpy as np

ALPHA = 3


def allocate(width, height, fill=0):
    """New zeroed (or filled) RGBA buffer."""
    return np.full((height, width, 4), fill, dtype=np.uint8)


def is_frame(buf):
    return isinstance(buf, np.ndarray) and buf.dtype == np.uint8 and buf.ndim == 3 and buf.shape[2] == 4


def frame_size(buf):
    """(width, height) of a frame buffer."""
    h, w = buf.shape[:2]
    return w, h


def require_frame(buf, name="frame"):
    if not is_frame(buf):
        shape = getattr(buf, 'shape', None)
        dtype = getattr(buf, 'dtype', None)
        raise ValueError(f"{name} must be an (H, W, 4) uint8 RGBA buffer, got shape={shape} dtype={dtype}")
    return buf


def require_same_size(*named_buffers):
    """
    Check that every (name, buffer) pair is an RGBA frame of one common size.
    None buffers are skipped (optional inputs).
    """
    expected = None
    for name, buf in named_buffers:
        if buf is None:
            continue
        require_frame(buf, name)
        if expected is None:
            expected = (name, buf.shape[:2])
        elif buf.shape[:2] != expected[1]:
            raise ValueError(
                f"{name} is {buf.shape[1]}x{buf.shape[0]} but {expected[0]} is "
                f"{expected[1][1]}x{expected[1][0]}"
            )


def from_bgr(frame_bgr):
    """OpenCV BGR / BGRA / gray image -> RGBA frame buffer (always a new array)."""
    if frame_bgr.ndim == 2:
        return cv2.cvtColor(frame_bgr, cv2.COLOR_GRAY2RGBA)
    if frame_bgr.shape[2] == 4:
        return cv2.cvtColor(frame_bgr, cv2.COLOR_BGRA2RGBA)
    return cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGBA)


def to_bgra(frame):
    """RGBA frame buffer -> OpenCV BGRA (for imwrite / imencode)."""
    return cv2.cvtColor(frame, cv2.COLOR_RGBA2BGRA)


def to_rgb(frame):
    """RGBA frame buffer -> RGB, alpha dropped."""
    return np.ascontiguousarray(frame[:, :, :3])


def mask_from_probability(prob, width=None, height=None):
    """
    (H, W) float probabilities in [0, 1] -> RGBA mask buffer.

    Alpha carries round(p * 255); RGB is left at zero. The probability map is
    resized to (width, height) when the model ran at a different resolution.
    """
    prob = np.squeeze(np.asarray(prob, dtype=np.float32))
    if prob.ndim != 2:
        raise ValueError(f"Expected 2D probability mask, got shape {prob.shape}")

    h, w = prob.shape
    if width is not None and height is not None and (w != width or h != height):
        prob = cv2.resize(prob, (width, height), interpolation=cv2.INTER_LINEAR)
        h, w = height, width

    mask = allocate(w, h)
    mask[:, :, ALPHA] = np.floor(np.clip(prob, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)
    return mask
