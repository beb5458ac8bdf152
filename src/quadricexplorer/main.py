"""
Application Initialization
==========================
This module wires the model, controllers and views together and starts the
Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging (level from the QUADRIC_LOG_LEVEL environment variable).
2. Creates the QApplication with its QSettings identity.
3. Builds the streak store and hands it to the Main Window.
"""
import logging
import os
import sys

from quadricexplorer.application import create_app
from quadricexplorer.config import LOG_LEVEL_ENV
from quadricexplorer.controller.persistence import SettingsStreakStore
from quadricexplorer.logging_config import parse_level, setup_logging
from quadricexplorer.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> None:
    # 1. Setup Logging (Console)
    # e.g. QUADRIC_LOG_LEVEL=DEBUG to see every recomputation
    setup_logging(level=parse_level(os.environ.get(LOG_LEVEL_ENV)))

    # 2. Create the Qt Application (must exist before QSettings is used)
    app = create_app()

    # 3. Initialize the Main Window
    window = MainWindow(SettingsStreakStore())
    window.show()
    logger.info("Application started.")

    # 4. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
