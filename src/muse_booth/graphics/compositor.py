# Project MUSE - compositor.py
# Person / Background Compositing (Soft Threshold Alpha Blend)
# (C) 2025 MUSE Corp. All rights reserved.

"""
Per-frame compositor.

Turns a smoothed person mask into a soft alpha with a smoothstep ramp and
blends the live video against transparency, a replacement background, or an
opaque black fallback.

Effective blend rules (pa = person alpha):

    mode      background   pa > 0                       pa == 0
    remove    -            video RGB, A = 255*pa        (0, 0, 0, 0)
    replace   present      video*pa + bg*(1-pa), A=255  bg RGB, A = 255
    other     -            video RGB, A = 255*pa        (0, 0, 0, 255)

'original' never reaches the blend: the video frame is passed through.
"""

import numpy as np

from muse_booth.graphics.buffers import ALPHA, require_same_size

MODE_ORIGINAL = "original"
MODE_REMOVE = "remove"
MODE_REPLACE = "replace"
MODES = (MODE_ORIGINAL, MODE_REMOVE, MODE_REPLACE)

# Probability band of the soft threshold
THRESHOLD_LOW = 0.3
THRESHOLD_HIGH = 0.7


def smoothstep(value, low=THRESHOLD_LOW, high=THRESHOLD_HIGH):
    """
    Cubic 0 -> 1 ramp between low and high (zero slope at both ends).
    Works on scalars and numpy arrays.
    """
    if not high > low:
        raise ValueError(f"smoothstep needs low < high, got {low}, {high}")
    v = np.asarray(value, dtype=np.float64)
    # Centred form of 3t^2 - 2t^3: exactly 0.5 at the band midpoint
    c = np.clip((v - 0.5 * (low + high)) / (high - low), -0.5, 0.5)
    out = np.clip(0.5 + 1.5 * c - 2.0 * c * c * c, 0.0, 1.0)
    out = np.where(v <= low, 0.0, np.where(v >= high, 1.0, out))
    if out.ndim == 0:
        return float(out)
    return out


def _round(x):
    # Round half up, as the preview canvas does
    return np.floor(x + 0.5)


def person_alpha(mask, low=THRESHOLD_LOW, high=THRESHOLD_HIGH):
    """(H, W) float64 soft alpha from an RGBA mask buffer."""
    return smoothstep(mask[:, :, ALPHA].astype(np.float64) / 255.0, low, high)


def composite(mode, smoothed_mask, video_frame, background=None,
              low=THRESHOLD_LOW, high=THRESHOLD_HIGH):
    """
    Build the output RGBA frame.

    Args:
        mode: 'original', 'remove' or 'replace' (anything else takes the fallback rule)
        smoothed_mask: (H, W, 4) uint8 mask, alpha = person probability
        video_frame: (H, W, 4) uint8 RGBA video frame
        background: (H, W, 4) uint8 RGBA background or None
        low, high: smoothstep band
    Returns:
        New (H, W, 4) uint8 RGBA buffer
    Raises:
        ValueError: buffers are not RGBA frames of one common size
    """
    if mode == MODE_ORIGINAL:
        require_same_size(("video_frame", video_frame))
        return video_frame.copy()

    require_same_size(
        ("video_frame", video_frame),
        ("smoothed_mask", smoothed_mask),
        ("background", background),
    )

    pa = person_alpha(smoothed_mask, low, high)
    fg = pa > 0.0
    fg3 = fg[..., None]
    video_rgb = video_frame[:, :, :3]

    out = np.empty_like(video_frame)

    if mode == MODE_REMOVE:
        # Transparent background, soft edges
        out[:, :, :3] = np.where(fg3, video_rgb, 0)
        out[:, :, ALPHA] = np.where(fg, _round(255.0 * pa), 0)

    elif mode == MODE_REPLACE and background is not None:
        bg_rgb = background[:, :, :3]
        pa3 = pa[..., None]
        blended = _round(video_rgb * pa3 + bg_rgb * (1.0 - pa3))
        out[:, :, :3] = np.where(fg3, blended, bg_rgb)
        out[:, :, ALPHA] = 255

    else:
        # Fallback: replace without a background yet, or an unknown mode
        out[:, :, :3] = np.where(fg3, video_rgb, 0)
        out[:, :, ALPHA] = np.where(fg, _round(255.0 * pa), 255)

    return out
