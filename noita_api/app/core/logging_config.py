"""
Logging configuration for the Noïta API.

``setup_logging`` attaches a console handler and, when ``LOG_FILE`` is
set, a file handler to the root logger.  Level and file default to the
values in ``settings``; ``DEBUG=true`` forces the DEBUG level.  The
handlers are tagged by name, so calling ``create_app`` repeatedly (as
the test-suite does) never attaches them twice, while handlers owned by
someone else (uvicorn, pytest) are left alone.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER_NAME = "noita.console"
FILE_HANDLER_NAME = "noita.file"


def _resolve_level(level: Optional[str]) -> int:
    if settings.debug:
        return logging.DEBUG
    name = (level or settings.log_level).upper()
    return getattr(logging, name, logging.INFO)


def _has_handler(logger: logging.Logger, name: str) -> bool:
    return any(handler.get_name() == name for handler in logger.handlers)


def _file_handler(logfile: str, formatter: logging.Formatter) -> logging.Handler:
    log_path = Path(logfile).resolve()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.set_name(FILE_HANDLER_NAME)
    handler.setFormatter(formatter)
    return handler


def setup_logging(level: Optional[str] = None, logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : Optional[str]
        Logging level name (e.g. ``"DEBUG"``).  Defaults to
        ``settings.log_level``; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        File to log to in addition to the console.  Defaults to
        ``settings.log_file``; no file handler when both are empty.
    """
    root = logging.getLogger()
    root.setLevel(_resolve_level(level))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if not _has_handler(root, CONSOLE_HANDLER_NAME):
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    logfile = logfile or settings.log_file
    if logfile and not _has_handler(root, FILE_HANDLER_NAME):
        root.addHandler(_file_handler(logfile, formatter))
