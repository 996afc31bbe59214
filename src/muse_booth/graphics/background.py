# Project MUSE - background.py
# Replacement Background Loading & Scaling
# (C) 2025 MUSE Corp. All rights reserved.

import os
import threading

import cv2
import numpy as np

from muse_booth.graphics import buffers
from muse_booth.utils.logger import get_logger

logger = get_logger("Background")

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp", ".webp")


def load_background(path):
    """
    Decode an image file into an RGBA frame buffer.
    Returns None (and logs) when the file is missing or cannot be decoded.
    """
    if not path or not os.path.exists(path):
        logger.error(f"Failed to load background: {path} (not found)")
        return None

    # imdecode keeps non-ASCII paths working on Windows
    try:
        raw = np.fromfile(path, dtype=np.uint8)
    except OSError as e:
        logger.error(f"Failed to load background: {path} ({e})")
        return None

    img = cv2.imdecode(raw, cv2.IMREAD_UNCHANGED) if raw.size else None
    if img is None:
        logger.error(f"Failed to load background: {path} (undecodable)")
        return None

    if img.dtype == np.uint16:
        # 16-bit PNG / TIFF
        img = cv2.convertScaleAbs(img, alpha=255.0 / 65535.0)

    rgba = buffers.from_bgr(img)
    # Backgrounds are drawn opaque
    rgba[:, :, buffers.ALPHA] = 255
    logger.info(f"Background loaded: {path} ({rgba.shape[1]}x{rgba.shape[0]})")
    return rgba


def fit_background(image, width, height):
    """Stretch a background to the output size (full-canvas draw)."""
    if image.shape[1] == width and image.shape[0] == height:
        return image.copy()
    interp = cv2.INTER_AREA if image.shape[1] > width else cv2.INTER_LINEAR
    return cv2.resize(image, (width, height), interpolation=interp)


def list_backgrounds(directory):
    """Sorted image files in the background folder (empty if missing)."""
    if not directory or not os.path.isdir(directory):
        return []
    files = [
        os.path.join(directory, f) for f in os.listdir(directory)
        if f.lower().endswith(IMAGE_EXTENSIONS)
    ]
    files.sort()
    return files


class BackgroundCache:
    """
    Holds the scaled copy of one background for the current output size.
    The decoded source is reused; scaling happens once per size change.
    Only the frame thread touches it: a new background is a new source object.
    """

    def __init__(self):
        self.source = None
        self.scaled = None

    def get(self, image, width, height):
        if image is None:
            return None
        if (
            self.source is not image
            or self.scaled is None
            or self.scaled.shape[1] != width
            or self.scaled.shape[0] != height
        ):
            self.source = image
            self.scaled = fit_background(image, width, height)
            # Shared across frames, so guard it against in-place edits
            self.scaled.setflags(write=False)
        return self.scaled

    def reset(self):
        self.source = None
        self.scaled = None


class BackgroundLoader:
    """
    Loads backgrounds off the frame thread.

    on_done(path, image_or_none) is called from the loader thread; callers
    hand the result to the session state, which drops stale paths.
    """

    def __init__(self, on_done):
        self.on_done = on_done

    def load(self, path):
        t = threading.Thread(target=self._worker, args=(path,))
        t.daemon = True
        t.start()
        return t

    def _worker(self, path):
        image = load_background(path)
        try:
            self.on_done(path, image)
        except Exception as e:
            logger.error(f"Background callback failed for {path}: {e}")
