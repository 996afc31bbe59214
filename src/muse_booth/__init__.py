# Project MUSE - muse_booth/__init__.py
# AI Photo Booth (virtual green screen)
# (C) 2025 MUSE Corp. All rights reserved.

__version__ = "1.0.0"
