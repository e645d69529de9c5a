from __future__ import annotations

import logging
from pathlib import Path

from .errors import DirectoryUnavailable

FILE_FORMAT = "%(asctime)s | [%(levelname)s] | %(name)s | %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _ensure_parent(logfile: Path) -> None:
    try:
        logfile.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryUnavailable(logfile.parent, str(e)) from e


def build_file_handler(logfile: Path) -> logging.FileHandler:
    """
    The file is opened on first emit, so a retention pass run right
    after attaching the handler never sees the current run's log.
    """
    _ensure_parent(logfile)

    handler = logging.FileHandler(logfile, encoding="utf-8", delay=True)
    handler.setLevel(logging.NOTSET)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
    return handler


def repoint_file_handler(handler: logging.FileHandler, new_logfile: Path) -> None:
    """Switch an existing handler to a new file without re-adding it."""
    _ensure_parent(new_logfile)

    handler.acquire()
    try:
        handler.close()
        handler.baseFilename = str(new_logfile)
        # reopened lazily by emit()
        handler.stream = None
    finally:
        handler.release()
