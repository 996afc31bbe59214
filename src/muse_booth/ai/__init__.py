# Project MUSE - ai/__init__.py
# (C) 2025 MUSE Corp. All rights reserved.

from .segmenter import SelfieSegmenter

__all__ = ['SelfieSegmenter']
