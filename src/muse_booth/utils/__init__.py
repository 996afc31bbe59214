# Project MUSE - utils/__init__.py
# (C) 2025 MUSE Corp. All rights reserved.
