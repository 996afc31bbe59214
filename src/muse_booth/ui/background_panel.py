# Project MUSE - background_panel.py
# Background Picker: Original / Remove / Custom Images
# (C) 2025 MUSE Corp. All rights reserved.

import os

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGroupBox, QLabel, QToolButton, QButtonGroup,
    QScrollArea, QGridLayout
)
from PySide6.QtGui import QIcon, QPixmap
from PySide6.QtCore import Signal, Qt, QSize

from muse_booth.graphics.compositor import MODE_ORIGINAL, MODE_REMOVE

THUMB_SIZE = QSize(120, 68)


class BackgroundPanel(QWidget):
    """
    [UI Panel] Right sidebar for picking the background.
    """
    modeSelected = Signal(str)
    backgroundSelected = Signal(str)

    def __init__(self, background_files=()):
        super().__init__()

        self.setStyleSheet("background-color: #1E1E1E;")
        self.setFixedWidth(300)

        self.group = QButtonGroup(self)
        self.group.setExclusive(True)
        self.mode_buttons = {}
        self.background_buttons = {}

        self._init_ui(list(background_files))

    def _init_ui(self, background_files):
        layout = QVBoxLayout()
        layout.setSpacing(10)
        layout.setContentsMargins(10, 20, 10, 20)

        title = QLabel("MUSE BOOTH")
        title.setStyleSheet("font-size: 20px; font-weight: bold; color: #FFFFFF; margin-bottom: 10px;")
        title.setAlignment(Qt.AlignCenter)
        layout.addWidget(title)

        # Effect group
        effect_group = QGroupBox("Effect")
        self._style_groupbox(effect_group)
        effect_layout = QVBoxLayout()

        btn_original = self._make_option("Original", None)
        btn_original.clicked.connect(lambda: self.modeSelected.emit(MODE_ORIGINAL))
        self.mode_buttons[MODE_ORIGINAL] = btn_original
        effect_layout.addWidget(btn_original)

        btn_remove = self._make_option("Remove Background", None)
        btn_remove.clicked.connect(lambda: self.modeSelected.emit(MODE_REMOVE))
        self.mode_buttons[MODE_REMOVE] = btn_remove
        effect_layout.addWidget(btn_remove)

        effect_group.setLayout(effect_layout)
        layout.addWidget(effect_group)

        # Custom backgrounds
        bg_group = QGroupBox("Backgrounds")
        self._style_groupbox(bg_group)
        bg_group_layout = QVBoxLayout()

        grid_host = QWidget()
        grid = QGridLayout()
        grid.setSpacing(6)
        if not background_files:
            empty = QLabel("No images in the background folder.")
            empty.setStyleSheet("color: #777; font-size: 11px;")
            grid.addWidget(empty, 0, 0)
        for idx, path in enumerate(background_files):
            name = os.path.splitext(os.path.basename(path))[0]
            btn = self._make_option(name, path)
            btn.clicked.connect(lambda checked=False, p=path: self.backgroundSelected.emit(p))
            self.background_buttons[path] = btn
            grid.addWidget(btn, idx // 2, idx % 2)
        grid_host.setLayout(grid)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(grid_host)
        scroll.setStyleSheet("border: none;")
        bg_group_layout.addWidget(scroll)

        bg_group.setLayout(bg_group_layout)
        layout.addWidget(bg_group, 1)

        info_label = QLabel("Segmentation: MediaPipe Selfie")
        info_label.setStyleSheet("color: #555; font-size: 10px;")
        info_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(info_label)

        self.setLayout(layout)

    def _make_option(self, text, image_path):
        btn = QToolButton()
        btn.setText(text)
        btn.setCheckable(True)
        if image_path:
            pix = QPixmap(image_path)
            if not pix.isNull():
                btn.setIcon(QIcon(pix.scaled(THUMB_SIZE, Qt.KeepAspectRatioByExpanding, Qt.SmoothTransformation)))
                btn.setIconSize(THUMB_SIZE)
                btn.setToolButtonStyle(Qt.ToolButtonTextUnderIcon)
        else:
            btn.setMinimumWidth(240)
        btn.setStyleSheet("""
            QToolButton {
                background: #2A2A2A; color: #DDD; border: 2px solid #333;
                border-radius: 6px; padding: 6px; font-size: 12px;
            }
            QToolButton:checked { border-color: #00ADB5; color: #FFFFFF; }
            QToolButton:hover { border-color: #555; }
        """)
        self.group.addButton(btn)
        return btn

    def _style_groupbox(self, group):
        group.setStyleSheet("""
            QGroupBox {
                border: 1px solid #444;
                border-radius: 5px;
                margin-top: 10px;
                color: #AAA;
                font-weight: bold;
                background: #2A2A2A;
            }
            QGroupBox::title {
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 3px;
            }
        """)

    def set_mode(self, mode):
        """Reflect a mode chosen by the engine (e.g. revert to original)."""
        btn = self.mode_buttons.get(mode)
        if btn is not None:
            btn.setChecked(True)
