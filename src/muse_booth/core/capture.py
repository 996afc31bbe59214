# Project MUSE - capture.py
# Still-Frame Capture (PNG Export)
# (C) 2025 MUSE Corp. All rights reserved.

import os
from datetime import datetime, timezone

import cv2

from muse_booth.graphics import buffers
from muse_booth.utils.logger import get_logger

logger = get_logger("Capture")


def capture_timestamp(now=None):
    """UTC ISO-8601 timestamp with ':' swapped for '-' and no fraction, e.g. 2025-05-01T09-30-12."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H-%M-%S")


def capture_filename(prefix, now=None):
    return f"{prefix}-{capture_timestamp(now)}.png"


def encode_png(frame):
    """RGBA frame buffer -> PNG bytes (lossless, alpha kept)."""
    buffers.require_frame(frame)
    ok, data = cv2.imencode(".png", buffers.to_bgra(frame))
    if not ok:
        raise ValueError("PNG encoding failed")
    return data.tobytes()


def save_capture(frame, directory, prefix, now=None):
    """
    Write the last presented frame to <directory>/<prefix>-<timestamp>.png.

    Returns the written path, or None on failure (logged, not retried).
    A second capture within the same second gets a numeric suffix.
    """
    if frame is None:
        logger.warning("Nothing to capture yet.")
        return None

    try:
        data = encode_png(frame)
        os.makedirs(directory, exist_ok=True)

        filename = capture_filename(prefix, now)
        path = os.path.join(directory, filename)
        stem = filename[:-len(".png")]
        n = 1
        while os.path.exists(path):
            path = os.path.join(directory, f"{stem}-{n}.png")
            n += 1

        with open(path, "wb") as f:
            f.write(data)
    except (OSError, ValueError, cv2.error) as e:
        logger.error(f"Error capturing photo: {e}")
        return None

    logger.info(f"Photo saved: {path}")
    return path
