# Project MUSE - src/muse_booth/core/camera.py
# Created for AI Photo Booth Project
# (C) 2025 MUSE Corp. All rights reserved.

import cv2

from muse_booth.graphics import buffers
from muse_booth.utils.logger import get_logger


class Camera:
    def __init__(self, camera_id=0, width=1280, height=720, fps=30):
        self.logger = get_logger("Camera")
        self.camera_id = camera_id
        self.req_width = width
        self.req_height = height
        self.req_fps = fps
        self.width = 0
        self.height = 0
        self.cap = None
        self.is_running = False

    def start(self):
        """Open the webcam. Returns False if the device can't be opened."""
        self.logger.info(f"Opening webcam (Index: {self.camera_id})...")

        self.cap = cv2.VideoCapture(self.camera_id)
        if not self.cap.isOpened():
            self.logger.error(f"Could not open webcam {self.camera_id}.")
            self.cap.release()
            self.cap = None
            return False

        # Ideal resolution / fps, the driver may pick something else
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.req_width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.req_height)
        self.cap.set(cv2.CAP_PROP_FPS, self.req_fps)

        self.width = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.height = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        real_fps = self.cap.get(cv2.CAP_PROP_FPS)

        # Warm-up (wake the sensor)
        for _ in range(5):
            self.cap.read()

        self.is_running = True
        self.logger.info(f"Webcam opened: {self.width}x{self.height} @ {real_fps:.1f}fps")
        return True

    def read(self):
        """Latest frame as an RGBA buffer, or None."""
        if not self.is_running or self.cap is None:
            return None

        ret, frame = self.cap.read()
        if not ret or frame is None:
            return None

        return buffers.from_bgr(frame)

    def stop(self):
        """Release the webcam."""
        if self.cap:
            self.cap.release()
            self.cap = None
        if self.is_running:
            self.logger.info("Webcam released.")
        self.is_running = False
