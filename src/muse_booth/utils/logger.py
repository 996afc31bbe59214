# Project MUSE - src/muse_booth/utils/logger.py
# Created for AI Photo Booth Project
# (C) 2025 MUSE Corp. All rights reserved.

import logging


def get_logger(name):
    """
    Create (or reuse) a simple console logger for one component.
    """
    logger = logging.getLogger(f"muse_booth.{name}")

    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        # Console handler
        ch = logging.StreamHandler()
        ch.setLevel(logging.DEBUG)

        formatter = logging.Formatter('[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s', datefmt='%H:%M:%S')
        ch.setFormatter(formatter)

        logger.addHandler(ch)

    return logger
