# Project MUSE - viewport.py
# Created for AI Photo Booth Project
# (C) 2025 MUSE Corp. All rights reserved.

from PySide6.QtWidgets import QLabel, QSizePolicy
from PySide6.QtGui import QImage, QPixmap, QPainter, QColor
from PySide6.QtCore import Qt, QSize
import numpy as np

CHECKER_SIZE = 12


class Viewport(QLabel):
    """
    [UI Component] Shows the composited RGBA frame.
    - Transparent pixels are drawn over a checkerboard
    - Keeps aspect ratio when resizing
    """
    def __init__(self):
        super().__init__()
        self.setAlignment(Qt.AlignCenter)

        # Ignored: the image must not grow the widget (resize feedback loop)
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)

        self.setStyleSheet("background-color: #121212; border: 1px solid #333;")
        self.setText("Waiting for camera...")
        self.setMinimumSize(640, 360)
        self._checker_pixmap = None

    def update_image(self, frame):
        """
        :param frame: (H, W, 4) uint8 RGBA numpy array
        """
        if not isinstance(frame, np.ndarray) or frame.ndim != 3 or frame.shape[2] != 4:
            return
        if self.width() <= 0 or self.height() <= 0:
            return

        frame = np.ascontiguousarray(frame)
        h, w = frame.shape[:2]
        qt_img = QImage(frame.data, w, h, 4 * w, QImage.Format_RGBA8888)

        scaled = QPixmap.fromImage(qt_img).scaled(
            self.size(),
            Qt.KeepAspectRatio,
            Qt.SmoothTransformation
        )

        canvas = QPixmap(self._checker(scaled.width(), scaled.height()))
        painter = QPainter(canvas)
        painter.drawPixmap(0, 0, scaled)
        painter.end()

        self.setPixmap(canvas)

    def _checker(self, w, h):
        """Checkerboard pixmap, rebuilt only when the preview size changes."""
        if self._checker_pixmap is not None and self._checker_pixmap.size() == QSize(w, h):
            return self._checker_pixmap

        pixmap = QPixmap(w, h)
        painter = QPainter(pixmap)
        light = QColor("#3A3A3A")
        dark = QColor("#2A2A2A")
        for y in range(0, h, CHECKER_SIZE):
            for x in range(0, w, CHECKER_SIZE):
                color = light if ((x // CHECKER_SIZE) + (y // CHECKER_SIZE)) % 2 == 0 else dark
                painter.fillRect(x, y, CHECKER_SIZE, CHECKER_SIZE, color)
        painter.end()

        self._checker_pixmap = pixmap
        return pixmap

    def clear_image(self):
        self.clear()
        self.setText("Camera stopped.")
