import logging
import os
import sys

from PySide6.QtCore import QCoreApplication

from icy_mod_manager import APP_NAME
from icy_mod_manager.core.cli import run_cli

log = logging.getLogger(__name__)


def setup_logging():
    """One-time setup of logging for all modules."""

    FORMAT = "%(levelname)s:%(name)s:%(lineno)d %(message)s"
    log_level = logging.INFO

    # Prefer LOG_LEVEL env var if set
    env_log_level = os.environ.get("LOG_LEVEL")
    if env_log_level is not None:
        log_level = env_log_level.upper()

    # Configure root logger
    try:
        logging.basicConfig(format=FORMAT, level=log_level)
    except ValueError:
        logging.basicConfig(format=FORMAT, level=logging.INFO, force=True)
        # Only log after basicConfig!
        log.warning("Invalid LOG_LEVEL %s, defaulting to INFO", env_log_level)


def main():
    setup_logging()

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName(APP_NAME)

    sys.exit(run_cli(sys.argv[1:]))


if __name__ == "__main__":
    main()
