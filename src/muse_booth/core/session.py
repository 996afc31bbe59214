# Project MUSE - session.py
# Booth Session State (immutable, replaced once per tick)
# (C) 2025 MUSE Corp. All rights reserved.

from muse_booth.graphics.compositor import MODES, MODE_ORIGINAL, MODE_REMOVE, MODE_REPLACE

CAPTURE_PREFIXES = {
    MODE_REMOVE: "no-background",
    MODE_REPLACE: "custom-background",
}
DEFAULT_CAPTURE_PREFIX = "photo-booth"


class SessionState:
    """
    Snapshot of what the pipeline needs for one frame.

    - mode: 'original' / 'remove' / 'replace'
    - background: decoded RGBA background (replace mode only) or None
    - background_path: the selected background file (pending or loaded)
    - segmenter_ready: a segmentation model is available
    - running: the frame loop is active

    Every transition returns a new SessionState; instances are never edited.
    """

    __slots__ = ("mode", "background", "background_path", "segmenter_ready", "running")

    def __init__(self, mode=MODE_ORIGINAL, background=None, background_path=None,
                 segmenter_ready=False, running=False):
        if mode not in MODES:
            raise ValueError(f"Unknown compositing mode: {mode!r}")
        object.__setattr__(self, "mode", mode)
        object.__setattr__(self, "background", background)
        object.__setattr__(self, "background_path", background_path)
        object.__setattr__(self, "segmenter_ready", bool(segmenter_ready))
        object.__setattr__(self, "running", bool(running))

    def __setattr__(self, name, value):
        raise AttributeError("SessionState is immutable; use replace()")

    def __repr__(self):
        bg = "loaded" if self.background is not None else "none"
        return (f"SessionState(mode={self.mode!r}, background={bg}, "
                f"background_path={self.background_path!r}, "
                f"segmenter_ready={self.segmenter_ready}, running={self.running})")

    def replace(self, **changes):
        values = {name: getattr(self, name) for name in self.__slots__}
        values.update(changes)
        return SessionState(**values)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def select_mode(self, mode):
        """Original / Remove drop the background. Replace needs select_background()."""
        if mode not in MODES:
            raise ValueError(f"Unknown compositing mode: {mode!r}")
        if mode == MODE_REPLACE:
            return self.replace(mode=mode)
        return self.replace(mode=mode, background=None, background_path=None)

    def select_background(self, path):
        """Switch to replace mode; the previous background is dropped wholesale."""
        return self.replace(mode=MODE_REPLACE, background=None, background_path=path)

    def with_background(self, image, path):
        """Attach a loaded background if it is still the one selected."""
        if self.mode != MODE_REPLACE or path != self.background_path:
            return self
        return self.replace(background=image)

    def background_failed(self, path):
        """A failed load of the selected background reverts to original."""
        if self.mode != MODE_REPLACE or path != self.background_path:
            return self
        return self.replace(mode=MODE_ORIGINAL, background=None, background_path=None)

    def with_segmenter(self, ready):
        return self.replace(segmenter_ready=ready)

    def started(self):
        return self.replace(running=True)

    def stopped(self):
        return self.replace(running=False)

    # ------------------------------------------------------------------
    @property
    def needs_segmentation(self):
        return self.mode != MODE_ORIGINAL and self.segmenter_ready

    @property
    def capture_prefix(self):
        return CAPTURE_PREFIXES.get(self.mode, DEFAULT_CAPTURE_PREFIX)
