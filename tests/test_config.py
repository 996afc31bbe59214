# Project MUSE - tests/test_config.py
# (C) 2025 MUSE Corp. All rights reserved.

import json
import os

import pytest

from muse_booth.utils.config import SettingsManager, default_settings


def test_missing_file_is_created_with_defaults(tmp_path):
    manager = SettingsManager(root_dir=str(tmp_path))

    assert os.path.isfile(manager.config_path)
    with open(manager.config_path) as f:
        assert json.load(f) == default_settings()


def test_stored_values_override_defaults(tmp_path):
    (tmp_path / "booth_config.json").write_text(json.dumps({"camera_id": 2, "fps": 15, "stale_key": 1}))

    manager = SettingsManager(root_dir=str(tmp_path))

    assert manager.get("camera_id") == 2
    assert manager.get("fps") == 15
    assert manager.get("width") == 1280
    assert manager.get("stale_key") is None


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    (tmp_path / "booth_config.json").write_text("{ not json")

    manager = SettingsManager(root_dir=str(tmp_path))

    assert manager.settings == default_settings()


def test_non_object_file_is_ignored(tmp_path):
    (tmp_path / "booth_config.json").write_text("[1, 2, 3]")

    assert SettingsManager(root_dir=str(tmp_path)).settings == default_settings()


def test_update_persists(tmp_path):
    manager = SettingsManager(root_dir=str(tmp_path))
    manager.update(camera_id=1, virtual_cam=True)

    reloaded = SettingsManager(root_dir=str(tmp_path))
    assert reloaded.get("camera_id") == 1
    assert reloaded.get("virtual_cam") is True


def test_update_rejects_unknown_keys(tmp_path):
    manager = SettingsManager(root_dir=str(tmp_path))
    with pytest.raises(KeyError):
        manager.update(colour="blue")


def test_resolve_path(tmp_path):
    manager = SettingsManager(root_dir=str(tmp_path))

    assert manager.resolve_path("capture_dir") == os.path.join(str(tmp_path), "captures")

    absolute = str(tmp_path / "elsewhere")
    manager.update(capture_dir=absolute)
    assert manager.resolve_path("capture_dir") == absolute


def test_defaults_are_fresh_copies():
    a = default_settings()
    a["fps"] = 1
    assert default_settings()["fps"] == 30
