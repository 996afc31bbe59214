# Project MUSE - src/muse_booth/utils/config.py
# (C) 2025 MUSE Corp. All rights reserved.
# Role: Booth Settings Manager (JSON Persistence + Default Merge)

import os
import json

from muse_booth.utils.logger import get_logger

CONFIG_FILENAME = "booth_config.json"


def default_settings():
    """Fresh copy of the built-in settings."""
    return {
        # [Camera] getUserMedia-style ideal constraints
        "camera_id": 0,
        "width": 1280,
        "height": 720,
        "fps": 30,

        # [Segmentation] model_path: Tasks API .tflite (used when present)
        # model_selection: legacy solution, 0 = general, 1 = landscape
        "model_selection": 0,
        "model_path": "assets/models/selfie_segmenter.tflite",

        # [Compositing] smoothstep band for the soft threshold
        "threshold_low": 0.3,
        "threshold_high": 0.7,
        "default_mode": "original",

        # [Paths] relative paths resolve against the project root
        "background_dir": "assets/backgrounds",
        "capture_dir": "captures",

        # [Output] mirror the composite to a virtual camera (OBS etc.)
        "virtual_cam": False,
    }


class SettingsManager:
    def __init__(self, root_dir=None, filename=CONFIG_FILENAME):
        self.logger = get_logger("Config")
        if root_dir is None:
            root_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
        self.root_dir = root_dir
        self.config_path = os.path.join(self.root_dir, filename)
        self.settings = default_settings()

        self.load()

    def load(self):
        """Merge the stored file over the defaults. Missing file is created."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    loaded = json.load(f)
                if isinstance(loaded, dict):
                    for k, v in loaded.items():
                        # Unknown keys are dropped so stale files can't break lookups
                        if k in self.settings:
                            self.settings[k] = v
                else:
                    self.logger.warning(f"Config ignored (not an object): {self.config_path}")
            except (OSError, ValueError) as e:
                self.logger.warning(f"Config load failed: {e}")
        else:
            self.save()
        return self.settings

    def save(self):
        try:
            with open(self.config_path, 'w') as f:
                json.dump(self.settings, f, indent=4)
            return True
        except OSError as e:
            self.logger.error(f"Config save failed ({self.config_path}): {e}")
            return False

    def get(self, key, default=None):
        return self.settings.get(key, default)

    def update(self, **changes):
        for k, v in changes.items():
            if k not in self.settings:
                raise KeyError(f"Unknown setting: {k}")
            self.settings[k] = v
        self.save()

    def resolve_path(self, key):
        """Absolute path for a path-valued setting."""
        path = os.path.expanduser(self.settings[key])
        if not os.path.isabs(path):
            path = os.path.join(self.root_dir, path)
        return path
