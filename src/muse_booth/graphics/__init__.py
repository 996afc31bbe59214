# Project MUSE - graphics/__init__.py
# Mask Smoothing & Compositing
# (C) 2025 MUSE Corp. All rights reserved.

"""
Per-frame image processing for the booth.

This module provides:
- smooth: 3x3 edge smoothing of the segmentation mask
- composite / smoothstep: soft-threshold blend of person and background
"""

from .mask_smoother import smooth
from .compositor import composite, smoothstep, MODES, MODE_ORIGINAL, MODE_REMOVE, MODE_REPLACE

__all__ = ['smooth', 'composite', 'smoothstep', 'MODES', 'MODE_ORIGINAL', 'MODE_REMOVE', 'MODE_REPLACE']
