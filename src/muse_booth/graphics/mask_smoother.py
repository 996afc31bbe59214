# Project MUSE - mask_smoother.py
# Segmentation Mask Edge Smoothing (3x3 Gaussian)
# (C) 2025 MUSE Corp. All rights reserved.

"""
Mask smoothing for the compositing pipeline.

The segmentation model returns a noisy per-pixel person probability. A single
3x3 binomial blur on the alpha channel removes one-pixel speckles and softens
the cut-out edge before the compositor turns it into an alpha ramp.

Border rows/columns are not convolved: they are copied from the input as-is
(no wrap, no mirror), so output at the frame edge equals the raw mask.
"""

import numpy as np

from muse_booth.graphics.buffers import ALPHA, require_frame

SMOOTH_KERNEL = np.array([
    [1, 2, 1],
    [2, 4, 2],
    [1, 2, 1],
], dtype=np.int32)
KERNEL_SUM = int(SMOOTH_KERNEL.sum())  # 16


def smooth_alpha(alpha):
    """
    Blur a 2D uint8 alpha plane. Interior pixels get the kernel-weighted mean
    (round half up), border pixels are copied unchanged. Returns a new array.
    """
    h, w = alpha.shape
    out = alpha.copy()
    if w < 3 or h < 3:
        # No interior pixel
        return out

    src = alpha.astype(np.int32)
    acc = np.zeros((h - 2, w - 2), dtype=np.int32)
    for ky in range(3):
        for kx in range(3):
            acc += SMOOTH_KERNEL[ky, kx] * src[ky:ky + h - 2, kx:kx + w - 2]

    # Integer round-half-up of acc / 16
    interior = (acc + KERNEL_SUM // 2) // KERNEL_SUM
    out[1:-1, 1:-1] = np.clip(interior, 0, 255).astype(np.uint8)
    return out


def smooth(mask, width=None, height=None):
    """
    Smooth an RGBA mask buffer.

    Args:
        mask: (H, W, 4) uint8 mask, alpha = person probability
        width, height: optional expected size; must match the buffer
    Returns:
        New (H, W, 4) uint8 buffer. RGB is copied, only alpha is filtered.
    """
    require_frame(mask, "mask")
    h, w = mask.shape[:2]
    if (width is not None and width != w) or (height is not None and height != h):
        raise ValueError(f"mask is {w}x{h}, expected {width}x{height}")

    smoothed = mask.copy()
    smoothed[:, :, ALPHA] = smooth_alpha(mask[:, :, ALPHA])
    return smoothed
