# price_scraper/config/logging_config.py

"""Logging for one price_scraper process.

Every ``price_scraper.*`` logger writes to ``logs/run_<timestamp>.log``
at DEBUG and to stderr at a caller-chosen threshold. When the HTTP
service runs, uvicorn's server logger is attached to the same handlers;
uvicorn's access logger stays silent because ``price_scraper.access``
already records each request without its query string.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from price_scraper.config.settings import Settings

PROJECT_LOGGER = "price_scraper"
SERVER_LOGGER = "uvicorn"
SERVER_ACCESS_LOGGER = "uvicorn.access"

_FILE_FORMAT = (
    "%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)s | "
    "%(module)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _active_log_file(logger: logging.Logger) -> Path | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def _attach_server_loggers(handlers: list[logging.Handler]) -> None:
    server = logging.getLogger(SERVER_LOGGER)
    server.setLevel(logging.INFO)
    server.propagate = False
    for handler in handlers:
        if handler not in server.handlers:
            server.addHandler(handler)
    logging.getLogger(SERVER_ACCESS_LOGGER).disabled = True


def setup_logging(
    console_level: int = logging.WARNING, serving: bool = False,
) -> Path:
    """Configure the ``price_scraper`` logger for this run.

    Args:
        console_level: Threshold for the stderr handler. The service
            passes INFO so request lines reach the console.
        serving: Also route uvicorn's server logger through the same
            handlers and mute uvicorn's access logger.

    Returns:
        The path of the log file in use. Repeat calls keep the existing
        handlers and return the file they already write to.
    """
    project = logging.getLogger(PROJECT_LOGGER)
    project.setLevel(logging.DEBUG)

    log_file = _active_log_file(project)
    if log_file is None:
        Settings.LOGS_DIR.mkdir(parents=True, exist_ok=True)
        log_file = Settings.LOGS_DIR / (
            f"run_{datetime.now():%Y%m%d_%H%M%S}.log"
        )

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
        )
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(
            logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
        )
        project.addHandler(file_handler)
        project.addHandler(console_handler)
        project.debug("Writing run log to %s", log_file)

    if serving:
        _attach_server_loggers(list(project.handlers))

    return log_file
