# Project MUSE - composite_image.py
# Offline compositor: run one still photo through Segment -> Smooth -> Composite
# (C) 2025 MUSE Corp. All rights reserved.
# Usage: python tools/composite_image.py photo.jpg --mode replace --background beach.jpg -o out.png

import os
import sys
import argparse

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(_project_root, "src"))

from muse_booth.ai.segmenter import SelfieSegmenter
from muse_booth.core.capture import encode_png
from muse_booth.core.pipeline import process_frame
from muse_booth.core.session import SessionState
from muse_booth.graphics.background import load_background
from muse_booth.graphics.compositor import MODES, MODE_REPLACE
from muse_booth.utils.config import SettingsManager
from muse_booth.utils.logger import get_logger

logger = get_logger("Composite")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Composite a single photo like the booth preview does")
    parser.add_argument("input", help="Photo to process")
    parser.add_argument("--mode", choices=MODES, default="remove")
    parser.add_argument("--background", default=None, help="Background image (replace mode)")
    parser.add_argument("-o", "--output", default="composite.png", help="PNG to write")
    args = parser.parse_args(argv)

    if args.mode == MODE_REPLACE and not args.background:
        parser.error("--background is required for replace mode")

    frame = load_background(args.input)
    if frame is None:
        return 1

    state = SessionState(segmenter_ready=True).select_mode(args.mode)
    if args.mode == MODE_REPLACE:
        background = load_background(args.background)
        if background is None:
            return 1
        state = state.select_background(args.background).with_background(background, args.background)

    settings = SettingsManager()
    with SelfieSegmenter(
        model_selection=int(settings.get("model_selection", 0)),
        model_path=settings.resolve_path("model_path"),
    ) as segmenter:
        result = process_frame(
            state, frame, segmenter,
            low=float(settings.get("threshold_low", 0.3)),
            high=float(settings.get("threshold_high", 0.7)),
        )

    logger.info(f"Frame status: {result.status}")
    with open(args.output, "wb") as f:
        f.write(encode_png(result.frame))
    logger.info(f"Saved: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
