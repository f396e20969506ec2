"""Logging setup for the harmonet CLI and scripts."""

import logging
import logging.handlers
import sys
from pathlib import Path

CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d) - %(message)s"

# Third-party loggers that are only interesting when something breaks
QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy", "aiosqlite")


def setup_logging(log_file: bool = True, debug: bool = False, log_dir: str = "logs") -> None:
    level = logging.DEBUG if debug else logging.INFO
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(console)

    if log_file:
        directory = Path(log_dir)
        directory.mkdir(exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            directory / "harmonet.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(file_handler)

    logging.getLogger("harmonet").setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
