# Project MUSE - main_window.py
# Created for AI Photo Booth Project
# (C) 2025 MUSE Corp. All rights reserved.

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QDockWidget, QLabel, QPushButton
)
from PySide6.QtCore import Qt, QTimer

from muse_booth.ui.viewport import Viewport
from muse_booth.ui.background_panel import BackgroundPanel
from muse_booth.utils.logger import get_logger

STATUS_COLORS = {
    "loading": "#E0A800",
    "ready": "#00ADB5",
    "error": "#E05555",
}
FEEDBACK_MS = 2000


class MainWindow(QMainWindow):
    """
    [Main Application Window]
    - Center: Viewport (composited preview) + Start / Stop / Capture
    - Right: BackgroundPanel (effect + background picker)
    - Wires UI actions to the BoothWorker thread
    """

    def __init__(self, background_files=()):
        super().__init__()
        self.logger = get_logger("MainWindow")

        self.setWindowTitle("MUSE Booth: AI Virtual Green Screen")
        self.resize(1280, 720)
        self.setStyleSheet("background-color: #121212; color: #F0F0F0;")

        self._init_ui(background_files)

    def _init_ui(self, background_files):
        central = QWidget()
        layout = QVBoxLayout()
        layout.setContentsMargins(8, 8, 8, 8)

        # 1. Preview
        self.viewport = Viewport()
        layout.addWidget(self.viewport, 1)

        # 2. Controls
        controls = QHBoxLayout()
        self.start_btn = QPushButton("Start Camera")
        self.stop_btn = QPushButton("Stop")
        self.capture_btn = QPushButton("Capture")
        for btn in (self.start_btn, self.stop_btn, self.capture_btn):
            btn.setMinimumHeight(36)
            btn.setStyleSheet("""
                QPushButton { background: #2A2A2A; color: #EEE; border: 1px solid #444; border-radius: 4px; padding: 0 18px; }
                QPushButton:hover { border-color: #00ADB5; }
                QPushButton:disabled { color: #555; }
            """)
            controls.addWidget(btn)
        self.stop_btn.setEnabled(False)
        self.capture_btn.setEnabled(False)

        self.capture_feedback = QLabel("Photo saved!")
        self.capture_feedback.setStyleSheet("color: #00ADB5; font-weight: bold; padding-left: 12px;")
        self.capture_feedback.hide()
        controls.addWidget(self.capture_feedback)
        controls.addStretch()
        layout.addLayout(controls)

        central.setLayout(layout)
        self.setCentralWidget(central)

        # 3. Right dock (background picker)
        self.dock_panel = QDockWidget("Background", self)
        self.dock_panel.setAllowedAreas(Qt.RightDockWidgetArea)
        self.dock_panel.setFeatures(QDockWidget.NoDockWidgetFeatures)

        self.background_panel = BackgroundPanel(background_files)
        self.dock_panel.setWidget(self.background_panel)
        self.addDockWidget(Qt.RightDockWidgetArea, self.dock_panel)

        # Status bar
        self.status_label = QLabel("")
        self.status_label.setStyleSheet("padding: 5px; color: #888;")
        self.statusBar().addWidget(self.status_label)

    def connect_worker(self, worker):
        """
        Worker -> Signal -> UI (main thread)
        UI -> worker commands (picked up by the frame loop)
        """
        worker.frame_processed.connect(self.viewport.update_image)
        worker.status_changed.connect(self.update_status)
        worker.camera_state_changed.connect(self._on_camera_state)
        worker.mode_changed.connect(self.background_panel.set_mode)
        worker.capture_saved.connect(self._show_capture_feedback)

        self.start_btn.clicked.connect(worker.start_camera)
        self.stop_btn.clicked.connect(worker.stop_camera)
        self.capture_btn.clicked.connect(worker.capture_photo)

        self.background_panel.modeSelected.connect(worker.select_mode)
        self.background_panel.backgroundSelected.connect(worker.select_background)

        # Original selected by default
        self.background_panel.set_mode(worker.snapshot().mode)

        self.logger.info("UI linked to engine thread.")

    def update_status(self, message, kind):
        color = STATUS_COLORS.get(kind, "#888")
        self.status_label.setStyleSheet(f"padding: 5px; color: {color};")
        self.status_label.setText(message)

    def _on_camera_state(self, running):
        self.start_btn.setVisible(not running)
        self.stop_btn.setEnabled(running)
        self.capture_btn.setEnabled(running)
        if not running:
            self.viewport.clear_image()

    def _show_capture_feedback(self, path):
        self.capture_feedback.setToolTip(path)
        self.capture_feedback.show()
        QTimer.singleShot(FEEDBACK_MS, self.capture_feedback.hide)

    def keyPressEvent(self, event):
        """Space: capture."""
        if event.key() == Qt.Key_Space and self.capture_btn.isEnabled():
            self.capture_btn.click()
        else:
            super().keyPressEvent(event)
