"""
Application Initialization
==========================
This module wires the model, controller and view together and starts the
Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging from the command line.
2. Instantiates the scene store (Model) and the interaction controller.
3. Instantiates the Main Window (View) around the controller.
"""
from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication

from geocanvas.config import VISIBLE_APP_NAME
from geocanvas.controller.interaction import InteractionController
from geocanvas.logging_config import resolve_level, setup_logging
from geocanvas.model.state import SceneState
from geocanvas.view.main_window import MainWindow


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="geocanvas", description=VISIBLE_APP_NAME)
    parser.add_argument("--debug", action="store_true", help="log at DEBUG level")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_arg_parser().parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=resolve_level(args.debug), log_file=args.log_file)

    # 2. Create the Qt Application
    app = QApplication(sys.argv[:1])
    app.setApplicationName(VISIBLE_APP_NAME)

    # 3. Initialize the Data Model and the controller
    scene = SceneState()
    controller = InteractionController(scene)

    # 4. Initialize the Main Window, passing the controller
    window = MainWindow(controller)
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
