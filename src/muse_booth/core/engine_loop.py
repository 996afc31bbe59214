# Project MUSE - engine_loop.py
# Photo Booth Frame Loop (Camera -> Segment -> Smooth -> Composite -> Present)
# (C) 2025 MUSE Corp. All rights reserved.

import time

from PySide6.QtCore import QThread, Signal, QMutex, QMutexLocker

from muse_booth.utils.config import SettingsManager
from muse_booth.utils.logger import get_logger
from muse_booth.core.camera import Camera
from muse_booth.core.capture import save_capture
from muse_booth.core.pipeline import process_frame, passthrough
from muse_booth.core.session import SessionState
from muse_booth.graphics.background import BackgroundCache, BackgroundLoader
from muse_booth.graphics.compositor import MODE_ORIGINAL, MODES, THRESHOLD_LOW, THRESHOLD_HIGH

STATUS_LOADING = "loading"
STATUS_READY = "ready"
STATUS_ERROR = "error"


class BoothWorker(QThread):
    """
    Owns the camera, the segmentation model and the session state.

    The UI never touches those directly: it sets pending flags / calls the
    thread-safe setters below, and the loop picks them up between frames.
    """
    frame_processed = Signal(object)
    status_changed = Signal(str, str)      # message, kind
    mode_changed = Signal(str)             # mode forced by the engine (bg load failure)
    camera_state_changed = Signal(bool)
    capture_saved = Signal(str)

    def __init__(self, settings=None, segmenter_factory=None, camera_factory=None):
        super().__init__()
        self.logger = get_logger("Engine")
        self.settings = settings if settings is not None else SettingsManager()

        self.running = True
        self.state_mutex = QMutex()

        mode = self.settings.get("default_mode", MODE_ORIGINAL)
        if mode not in MODES or mode == "replace":
            mode = MODE_ORIGINAL
        self.state = SessionState(mode=mode)

        self.segmenter_factory = segmenter_factory or self._default_segmenter
        self.camera_factory = camera_factory or self._default_camera
        self.segmenter = None
        self.camera = None
        self.virtual_cam = None

        self.bg_cache = BackgroundCache()
        self.bg_loader = BackgroundLoader(self._on_background_loaded)

        self.last_output = None
        self.pending_camera_start = False
        self.pending_camera_stop = False

        self.fps = int(self.settings.get("fps", 30))
        self.low, self.high = self._threshold_band()

    def _threshold_band(self):
        try:
            low = float(self.settings.get("threshold_low", THRESHOLD_LOW))
            high = float(self.settings.get("threshold_high", THRESHOLD_HIGH))
        except (TypeError, ValueError):
            low, high = THRESHOLD_LOW, THRESHOLD_HIGH
        if not high > low:
            self.logger.warning(
                f"Invalid threshold band ({low}, {high}); using {THRESHOLD_LOW}-{THRESHOLD_HIGH}"
            )
            return THRESHOLD_LOW, THRESHOLD_HIGH
        return low, high

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    def _default_segmenter(self):
        from muse_booth.ai.segmenter import SelfieSegmenter
        return SelfieSegmenter(
            model_selection=int(self.settings.get("model_selection", 0)),
            model_path=self.settings.resolve_path("model_path"),
        )

    def _default_camera(self):
        return Camera(
            camera_id=self.settings.get("camera_id", 0),
            width=int(self.settings.get("width", 1280)),
            height=int(self.settings.get("height", 720)),
            fps=self.fps,
        )

    # ------------------------------------------------------------------
    # Thread body
    # ------------------------------------------------------------------
    def run(self):
        self.logger.info("Engine thread started.")
        self._load_model()

        frame_count = 0
        no_frame_tick = 0
        acc_pipeline = 0.0
        prev_time = time.time()
        frame_interval = 1.0 / max(self.fps, 1)

        while self.running:
            if self.pending_camera_stop:
                self._execute_camera_stop()
                self.pending_camera_stop = False
            if self.pending_camera_start:
                self._execute_camera_start()
                self.pending_camera_start = False

            if self.camera is None:
                self.msleep(20)
                continue

            tick_start = time.perf_counter()
            frame = self.camera.read()
            if frame is None:
                no_frame_tick += 1
                if no_frame_tick % 60 == 0:
                    self.logger.warning(f"No frame from camera (Tick: {no_frame_tick})")
                self.msleep(5)
                continue
            if no_frame_tick > 0:
                self.logger.info("Camera frame signal restored.")
                no_frame_tick = 0

            state = self.snapshot()
            try:
                output = process_frame(state, frame, self.segmenter, self.bg_cache, self.low, self.high).frame
            except Exception as e:
                self.logger.error(f"Error processing video: {e}")
                output = passthrough(frame)

            # Stopped while this frame was in flight: drop it
            if self.pending_camera_stop or not self.running:
                continue

            with QMutexLocker(self.state_mutex):
                self.last_output = output

            if self.virtual_cam is not None:
                self.virtual_cam.send(output)
            self.frame_processed.emit(output)

            elapsed = time.perf_counter() - tick_start
            acc_pipeline += elapsed * 1000.0
            frame_count += 1
            curr_time = time.time()
            if curr_time - prev_time >= 1.0:
                fps = frame_count / (curr_time - prev_time)
                self.logger.debug(f"[FPS: {fps:.1f}] Pipeline: {acc_pipeline / frame_count:.1f}ms")
                frame_count = 0
                acc_pipeline = 0.0
                prev_time = curr_time

            # Pace to the display rate; a slow pass just delays the next tick
            remaining = frame_interval - elapsed
            if remaining > 0:
                self.msleep(int(remaining * 1000))

        self.cleanup()
        self.logger.info("Engine thread finished.")

    def _load_model(self):
        self.status_changed.emit("Loading AI model...", STATUS_LOADING)
        try:
            self.segmenter = self.segmenter_factory()
        except Exception as e:
            self.logger.error(f"Error initializing model: {e}")
            self.segmenter = None
            self._set_state(lambda s: s.with_segmenter(False))
            self.status_changed.emit("Error loading AI model. Showing original video only.", STATUS_ERROR)
            return

        self._set_state(lambda s: s.with_segmenter(True))
        self.status_changed.emit('AI model loaded! Click "Start Camera" to begin.', STATUS_READY)

    def _execute_camera_start(self):
        if self.camera is not None:
            return
        self.status_changed.emit("Starting camera...", STATUS_LOADING)

        camera = self.camera_factory()
        try:
            ok = camera.start()
        except Exception as e:
            self.logger.error(f"Error starting camera: {e}")
            ok = False
        if not ok:
            camera.stop()
            self.status_changed.emit("Error accessing camera. Please check permissions.", STATUS_ERROR)
            self.camera_state_changed.emit(False)
            return

        self.camera = camera
        if self.settings.get("virtual_cam", False):
            from muse_booth.core.virtual_cam import VirtualCamera
            vcam = VirtualCamera(camera.width, camera.height, self.fps)
            self.virtual_cam = vcam if vcam.is_open else None

        self._set_state(lambda s: s.started())
        self.camera_state_changed.emit(True)
        self.status_changed.emit("Ready! Select a background and click the camera button.", STATUS_READY)

    def _execute_camera_stop(self):
        if self.camera is not None:
            self.camera.stop()
            self.camera = None
        if self.virtual_cam is not None:
            self.virtual_cam.close()
            self.virtual_cam = None

        with QMutexLocker(self.state_mutex):
            self.state = self.state.stopped()
            self.last_output = None
        self.camera_state_changed.emit(False)
        self.status_changed.emit("Camera stopped.", STATUS_READY)

    # ------------------------------------------------------------------
    # State (thread-safe)
    # ------------------------------------------------------------------
    def snapshot(self):
        with QMutexLocker(self.state_mutex):
            return self.state

    def _set_state(self, transition):
        with QMutexLocker(self.state_mutex):
            self.state = transition(self.state)
            return self.state

    def select_mode(self, mode):
        """Original / Remove from the background panel."""
        state = self._set_state(lambda s: s.select_mode(mode))
        self.logger.info(f"Background mode: {state.mode}")

    def select_background(self, path):
        """Replace mode with an image; loads off-thread."""
        self._set_state(lambda s: s.select_background(path))
        self.logger.info(f"Background mode: replace ({path})")
        self.bg_loader.load(path)

    def _on_background_loaded(self, path, image):
        before = self.snapshot()
        if image is None:
            after = self._set_state(lambda s: s.background_failed(path))
            if after.mode != before.mode:
                self.mode_changed.emit(after.mode)
        else:
            self._set_state(lambda s: s.with_background(image, path))

    # ------------------------------------------------------------------
    # Commands from the UI
    # ------------------------------------------------------------------
    def start_camera(self):
        self.pending_camera_stop = False
        self.pending_camera_start = True

    def stop_camera(self):
        self.pending_camera_start = False
        self.pending_camera_stop = True

    def capture_photo(self):
        """Save the frame currently on screen. Returns the path or None."""
        with QMutexLocker(self.state_mutex):
            frame = self.last_output
            prefix = self.state.capture_prefix

        path = save_capture(frame, self.settings.resolve_path("capture_dir"), prefix)
        if path:
            self.capture_saved.emit(path)
        return path

    def cleanup(self):
        self.logger.info("Cleanup")
        self._execute_camera_stop()
        if self.segmenter is not None and hasattr(self.segmenter, "close"):
            self.segmenter.close()
            self.segmenter = None

    def stop(self):
        self.running = False
