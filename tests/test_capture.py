# Project MUSE - tests/test_capture.py
# (C) 2025 MUSE Corp. All rights reserved.

import os
from datetime import datetime, timezone, timedelta

import cv2
import numpy as np
import pytest

from muse_booth.core.capture import capture_filename, capture_timestamp, encode_png, save_capture
from muse_booth.core.session import SessionState
from muse_booth.graphics import buffers

from conftest import make_frame

NOW = datetime(2025, 5, 1, 9, 30, 12, 456000, tzinfo=timezone.utc)


def test_timestamp_drops_fraction_and_colons():
    assert capture_timestamp(NOW) == "2025-05-01T09-30-12"


def test_timestamp_is_utc():
    local = datetime(2025, 5, 1, 18, 30, 12, tzinfo=timezone(timedelta(hours=9)))
    assert capture_timestamp(local) == "2025-05-01T09-30-12"


def test_filename_uses_mode_prefix():
    prefix = SessionState(mode="remove").capture_prefix
    assert capture_filename(prefix, NOW) == "no-background-2025-05-01T09-30-12.png"


def test_png_keeps_pixels_and_alpha():
    frame = make_frame(3, 2, (10, 20, 30, 128))
    frame[0, 0] = (255, 0, 0, 0)

    data = encode_png(frame)
    decoded = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)

    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    assert np.array_equal(buffers.from_bgr(decoded), frame)


def test_encode_rejects_non_frames():
    with pytest.raises(ValueError):
        encode_png(np.zeros((2, 2, 3), dtype=np.uint8))


def test_save_capture_writes_file(tmp_path):
    frame = make_frame(4, 4, (1, 2, 3, 255))

    path = save_capture(frame, str(tmp_path / "captures"), "custom-background", NOW)

    assert os.path.basename(path) == "custom-background-2025-05-01T09-30-12.png"
    assert os.path.isfile(path)


def test_same_second_capture_gets_suffix(tmp_path):
    frame = make_frame(2, 2)

    first = save_capture(frame, str(tmp_path), "photo-booth", NOW)
    second = save_capture(frame, str(tmp_path), "photo-booth", NOW)

    assert first != second
    assert os.path.basename(second) == "photo-booth-2025-05-01T09-30-12-1.png"


def test_nothing_to_capture(tmp_path):
    assert save_capture(None, str(tmp_path), "photo-booth", NOW) is None
    assert os.listdir(tmp_path) == []


def test_unwritable_directory_returns_none(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")

    assert save_capture(make_frame(2, 2), str(blocker), "photo-booth", NOW) is None
