from __future__ import annotations

import os
from pathlib import Path

# ---------------------------------------------------------------------
# Project root
# ---------------------------------------------------------------------

# This file lives in src/env/, so project root is two levels up
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

CONFIG_DIR = PROJECT_ROOT / "config"


# ---------------------------------------------------------------------
# Base directories (override-friendly)
# ---------------------------------------------------------------------


def _resolve_dir(env_var: str, default: Path) -> Path:
    """
    Resolve a directory path from an environment variable or default.
    Ensures the directory exists.
    """
    raw = os.environ.get(env_var)
    path = Path(raw).expanduser().resolve() if raw else default
    path.mkdir(parents=True, exist_ok=True)
    return path


# ---------------------------------------------------------------------
# Public paths
# ---------------------------------------------------------------------


def logs_dir() -> Path:
    """
    Root of all log directories (LOGKEEPER_LOGS_DIR or <project>/logs).
    Read on every call so run context changes are honoured.
    """
    return _resolve_dir("LOGKEEPER_LOGS_DIR", PROJECT_ROOT / "logs")
