"""
Application Initialization
==========================
This module wires the lesson core to the Qt window and starts the event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Sets up logging and reads the lesson configuration.
2. Instantiates the LessonController with a (optionally seeded) generator.
3. Passes the controller into the window and starts the frame loop.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

import numpy as np

from boundarylesson.config import DEFAULT_CONFIG, load_lesson_config
from boundarylesson.controller.lesson import LessonController
from boundarylesson.logging_config import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="boundarylesson",
        description="Separate red and blue dots with a line you steer from the keyboard.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible datasets.")
    parser.add_argument("--config", default=None, help="Path to a lesson config JSON file.")
    parser.add_argument("--debug", action="store_true", help="Verbose logging.")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    # 2. Lesson configuration
    try:
        config = load_lesson_config(args.config) if args.config else DEFAULT_CONFIG
    except (OSError, ValueError) as e:
        logger.error(f"Could not load lesson config: {e}")
        sys.exit(1)

    # 3. Core
    controller = LessonController(config=config, rng=np.random.default_rng(args.seed))

    # 4. Create the Qt Application and the window (imported late so the core
    #    stays usable without a display)
    from PySide6.QtWidgets import QApplication
    from boundarylesson.view.main_window import LessonWindow, VISIBLE_APP_NAME

    app = QApplication(sys.argv[:1])
    app.setApplicationName(VISIBLE_APP_NAME)

    window = LessonWindow(controller)
    window.show()
    window.start()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
