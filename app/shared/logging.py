"""
Logging configuration for the server and the maintenance CLI.

One pipe-separated line per record on stdout. Client addresses and
tunnel messages are logged at DEBUG only.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers held at WARNING unless the app itself runs at DEBUG.
QUIET_LOGGERS = ("uvicorn.access", "slowapi", "sqlalchemy.engine", "sqlalchemy.pool")


def configure_logging(level: str = "INFO") -> None:
    """Configure logging for the process.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
            Unknown names fall back to INFO.
    """
    root_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=root_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    quiet_level = logging.NOTSET if root_level <= logging.DEBUG else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
