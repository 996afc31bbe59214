# Project MUSE - pipeline.py
# Per-Frame Pipeline: Segment -> Smooth -> Composite
# (C) 2025 MUSE Corp. All rights reserved.

"""
One tick of the booth.

process_frame() takes the session snapshot and the latest camera frame and
returns the frame to present. It owns no state between calls: the driver
loop keeps the SessionState and passes it in every tick.
"""

from muse_booth.graphics.compositor import composite, THRESHOLD_LOW, THRESHOLD_HIGH
from muse_booth.graphics.mask_smoother import smooth
from muse_booth.graphics.background import fit_background
from muse_booth.utils.logger import get_logger

logger = get_logger("Pipeline")

STATUS_PASSTHROUGH = "passthrough"
STATUS_COMPOSITED = "composited"
STATUS_NO_MASK = "no_mask"
STATUS_SEGMENT_ERROR = "segment_error"


class FrameResult:
    """Output of one tick: the presented frame plus how it was produced."""

    __slots__ = ("state", "frame", "status")

    def __init__(self, state, frame, status):
        self.state = state
        self.frame = frame
        self.status = status

    @property
    def composited(self):
        return self.status == STATUS_COMPOSITED


def passthrough(frame):
    """Raw video, as a buffer the caller owns."""
    return frame.copy()


def process_frame(state, frame, segmenter=None, bg_cache=None,
                  low=THRESHOLD_LOW, high=THRESHOLD_HIGH):
    """
    Args:
        state: SessionState for this tick
        frame: (H, W, 4) uint8 RGBA video frame
        segmenter: object with segment(frame) -> mask | None, or None
        bg_cache: optional BackgroundCache so the background is scaled once per size
        low, high: smoothstep band for the compositor
    Returns:
        FrameResult (state is handed back unchanged)
    """
    if not state.needs_segmentation or segmenter is None:
        return FrameResult(state, passthrough(frame), STATUS_PASSTHROUGH)

    try:
        mask = segmenter.segment(frame)
    except Exception as e:
        # Transient: show raw video for this frame only
        logger.error(f"Segmentation failed: {e}")
        return FrameResult(state, passthrough(frame), STATUS_SEGMENT_ERROR)

    if mask is None:
        return FrameResult(state, passthrough(frame), STATUS_NO_MASK)

    h, w = frame.shape[:2]
    smoothed = smooth(mask, w, h)

    background = None
    if state.background is not None:
        if bg_cache is not None:
            background = bg_cache.get(state.background, w, h)
        else:
            background = fit_background(state.background, w, h)

    output = composite(state.mode, smoothed, frame, background, low, high)
    return FrameResult(state, output, STATUS_COMPOSITED)
