"""
Application Entry Point.

This module contains the main() function and startup configuration.
Separated from MainWindow to allow for easier testing.
"""

import argparse
import logging
import os
import sys
from datetime import datetime

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from PySide6.QtWidgets import QApplication  # noqa: E402

from lanechart.app.constants import (  # noqa: E402
    ENV_ITEMS_FILE,
    WINDOW_SETTINGS_APP,
    WINDOW_SETTINGS_KEY,
)
from lanechart.core.logging_config import (  # noqa: E402
    ENV_DEBUG,
    get_logger,
    setup_logging,
    shutdown_logging,
)

logger = get_logger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Lanechart timeline editor")
    parser.add_argument(
        "items",
        nargs="?",
        default=os.environ.get(ENV_ITEMS_FILE),
        help=f"JSON file with timeline items (or ${ENV_ITEMS_FILE})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help=f"Enable debug logging (otherwise ${ENV_DEBUG} decides)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Application entry point."""
    args = parse_args(argv)
    level = setup_logging(debug_mode=args.debug)

    logger.info("=" * 60)
    logger.info(f"Lanechart Session Started at {datetime.now().isoformat()}")
    logger.info(f"Log level: {logging.getLevelName(level)}")
    logger.info("=" * 60)

    # Defer MainWindow import until logging is configured
    from lanechart.app.main_window import MainWindow

    try:
        app = QApplication(sys.argv[:1])
        app.setOrganizationName(WINDOW_SETTINGS_KEY)
        app.setApplicationName(WINDOW_SETTINGS_APP)

        window = MainWindow()
        if args.items:
            window.open_file(args.items)
        else:
            window.restore_last_file()
        window.show()

        exit_code = app.exec()
        logger.info(f"Application exited with code {exit_code}")
        return exit_code
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
