# Project MUSE - main.py
# AI Photo Booth Entry Point
# (C) 2025 MUSE Corp. All rights reserved.

import sys
import signal
import argparse

from PySide6.QtWidgets import QApplication

try:
    import qdarktheme
except ImportError:
    qdarktheme = None

from muse_booth.core.engine_loop import BoothWorker
from muse_booth.graphics.background import list_backgrounds
from muse_booth.ui.main_window import MainWindow
from muse_booth.utils.config import SettingsManager
from muse_booth.utils.logger import get_logger


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="MUSE Booth - AI virtual green screen")
    parser.add_argument("--root", default=None, help="Folder holding booth_config.json (default: project root)")
    parser.add_argument("--camera", type=int, default=None, help="Camera index override")
    parser.add_argument("--virtual-cam", action="store_true", help="Also send the composite to a virtual camera")
    return parser.parse_args(argv)


def apply_overrides(settings, args):
    """Command-line overrides apply to this run only; the config file is left as is."""
    if args.camera is not None:
        settings.settings["camera_id"] = args.camera
    if args.virtual_cam:
        settings.settings["virtual_cam"] = True
    return settings


def main(argv=None):
    args = parse_args(argv)
    logger = get_logger("Main")
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    settings = SettingsManager(root_dir=args.root)
    apply_overrides(settings, args)

    app = QApplication(sys.argv)
    if qdarktheme is not None:
        qdarktheme.setup_theme("dark")

    backgrounds = list_backgrounds(settings.resolve_path("background_dir"))
    logger.info(f"Backgrounds found: {len(backgrounds)}")

    worker = BoothWorker(settings=settings)
    window = MainWindow(background_files=backgrounds)
    window.connect_worker(worker)

    # Model loads on the worker thread; the window stays responsive
    worker.start()
    window.show()

    code = app.exec()

    logger.info("Stopping engine thread...")
    worker.stop()
    worker.wait()
    logger.info("Engine stopped. Exiting.")
    return code


if __name__ == "__main__":
    sys.exit(main())
