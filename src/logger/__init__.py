from __future__ import annotations

import logging
import os
from datetime import datetime

from env import get_logging_env, logs_dir
from .console import build_console_handler
from .errors import (
    DeletionFailed,
    DirectoryUnavailable,
    InvalidConfiguration,
    RetentionError,
)
from .file import build_file_handler, repoint_file_handler
from .log_paths import (
    FilesystemLogFileProvider,
    LogContext,
    LogFileEntry,
    LogFileProvider,
    list_log_files,
    module_logs_dir,
    profile_logs_dir,
    resolve_directory,
)
from .retention import CleanResult, LogFileCleaner, enforce_retention, select_victims
from . import state as _state

__all__ = [
    "CleanResult",
    "DeletionFailed",
    "DirectoryUnavailable",
    "FilesystemLogFileProvider",
    "InvalidConfiguration",
    "LogContext",
    "LogFileCleaner",
    "LogFileEntry",
    "LogFileProvider",
    "RetentionError",
    "enforce_retention",
    "get_logger",
    "init_logging",
    "list_log_files",
    "module_logs_dir",
    "profile_logs_dir",
    "resolve_directory",
    "select_victims",
]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _level_to_int(level: str | int) -> int:
    if isinstance(level, int):
        return level
    lvl = logging.getLevelName(str(level).upper())
    return lvl if isinstance(lvl, int) else logging.INFO


def _ensure_run_id() -> str:
    run_id = os.environ.get("LOGKEEPER_RUN_ID")
    if not run_id:
        run_id = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        os.environ["LOGKEEPER_RUN_ID"] = run_id
    return run_id


def _target_context() -> tuple[str, LogContext]:
    command = os.environ.get("LOGKEEPER_COMMAND") or "bootstrap"
    profile = os.environ.get("LOGKEEPER_PROFILE") or None
    return command, LogContext(root=logs_dir(), module=command, profile=profile)


def init_logging() -> None:
    """
    Initialize logging for the entire process.

    - Handlers are attached ONLY to the root logger.
    - Named loggers inherit via propagation.
    - Safe to call multiple times; file handler is repointed, not stacked.
    - Older logs of the run's directory are pruned to LOG_RETENTION.
    """
    env = get_logging_env()

    root = logging.getLogger()
    command, context = _target_context()
    provider = FilesystemLogFileProvider.from_context(context, env.log_extensions)

    # Validate before touching handlers so a bad LOG_RETENTION fails fast.
    cleaner = LogFileCleaner(provider, env.log_retention)

    log_dir = provider.directory
    logfile = log_dir / f"{command}-{_ensure_run_id()}.log"

    # Base level from env, but verbose forces DEBUG everywhere.
    root_level = logging.DEBUG if env.verbose else _level_to_int(env.log_level)

    if _state.INITIALIZED and _state.LOG_FILE_PATH == logfile:
        root.setLevel(root_level)
        return

    existing_file: logging.FileHandler | None = None
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            existing_file = h
            break

    root.handlers.clear()
    root.setLevel(root_level)

    if existing_file is not None:
        repoint_file_handler(existing_file, logfile)
        root.addHandler(existing_file)
    else:
        root.addHandler(build_file_handler(logfile))

    if not env.quiet:
        console_level = logging.DEBUG if env.verbose else root_level
        root.addHandler(build_console_handler(console_level))

    _state.INITIALIZED = True
    _state.LOG_FILE_PATH = logfile
    _state.LAST_CLEAN = cleaner.clean()
