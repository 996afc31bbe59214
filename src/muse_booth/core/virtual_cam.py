# Project MUSE - virtual_cam.py
# (C) 2025 MUSE Corp. All rights reserved.
# Optional output sink: mirrors the composite to a virtual webcam (OBS etc.)

import numpy as np
import pyvirtualcam

from muse_booth.utils.logger import get_logger


class VirtualCamera:
    def __init__(self, width=1280, height=720, fps=30):
        """
        RGB output. Transparent pixels are flattened onto black, since
        virtual webcams carry no alpha.
        """
        self.logger = get_logger("VirtualCam")
        self.width = width
        self.height = height
        self.fps = fps
        self.cam = None

        self.logger.info(f"Connecting virtual camera... ({width}x{height} @ {fps}fps, RGB)")

        try:
            self.cam = pyvirtualcam.Camera(
                width=width,
                height=height,
                fps=fps,
                fmt=pyvirtualcam.PixelFormat.RGB
            )
            self.logger.info(f"Virtual camera connected: {self.cam.device}")
        except Exception as e:
            # No backend installed: keep running without this sink
            self.logger.error(f"Virtual camera unavailable: {e}")
            self.cam = None

    @property
    def is_open(self):
        return self.cam is not None

    def send(self, frame):
        if self.cam is None or frame is None:
            return
        if frame.shape[1] != self.width or frame.shape[0] != self.height:
            return

        alpha = frame[:, :, 3:4].astype(np.uint16)
        rgb = (frame[:, :, :3].astype(np.uint16) * alpha + 127) // 255
        self.cam.send(rgb.astype(np.uint8))

    def close(self):
        if self.cam:
            self.cam.close()
            self.cam = None
