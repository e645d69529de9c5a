from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from env.paths import logs_dir

# ------------------------------------------------------------
# Errors / helpers
# ------------------------------------------------------------


class ConfigError(RuntimeError):
    pass


def _as_bool(v: str) -> bool:
    return v.strip().lower() in {"1", "true", "yes", "on"}


def _as_int(name: str, v: str) -> int:
    try:
        return int(v.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {v!r}") from None


# ------------------------------------------------------------
# Logging environment (SAFE ANYWHERE)
# ------------------------------------------------------------


@dataclass(frozen=True)
class LoggingEnvironment:
    log_level: str
    log_retention: int
    log_extensions: str
    verbose: bool
    quiet: bool


def get_logging_env() -> LoggingEnvironment:
    log_level = os.environ.get("LOG_LEVEL", "INFO")

    # Negative values are passed through; the cleaner rejects them.
    log_retention = _as_int("LOG_RETENTION", os.environ.get("LOG_RETENTION", "30"))
    log_extensions = os.environ.get("LOG_EXTENSIONS", ".log")

    verbose = _as_bool(os.environ.get("LOGKEEPER_VERBOSE", "0"))
    quiet = _as_bool(os.environ.get("LOGKEEPER_QUIET", "0"))

    return LoggingEnvironment(
        log_level=log_level,
        log_retention=log_retention,
        log_extensions=log_extensions,
        verbose=verbose,
        quiet=quiet,
    )


# ------------------------------------------------------------
# Full runtime environment
# ------------------------------------------------------------


class Environment:
    def __init__(self):
        # Logging snapshot (immutable)
        self._logging = get_logging_env()

        # ---- RUN CONTEXT ----
        self.run_id = os.environ.get("LOGKEEPER_RUN_ID", "")
        self.command = os.environ.get("LOGKEEPER_COMMAND", "bootstrap")
        self.profile_name = os.environ.get("LOGKEEPER_PROFILE") or None

        # ---- FLAGS ----
        self.dry_run = _as_bool(os.environ.get("LOGKEEPER_DRY_RUN", "0"))

    def as_dict(self) -> dict:
        return {
            "Logging": {
                "log_level": self.log_level,
                "log_retention": self.log_retention,
                "log_extensions": self.log_extensions,
                "verbose": self.verbose,
                "quiet": self.quiet,
            },
            "Run": {
                "run_id": self.run_id,
                "command": self.command,
                "profile_name": self.profile_name,
                "logs_dir": str(logs_dir()),
            },
            "Behavior": {
                "dry_run": self.dry_run,
            },
        }

    # ---- logging passthrough ----
    @property
    def log_level(self) -> str:
        return self._logging.log_level

    @property
    def log_retention(self) -> int:
        return self._logging.log_retention

    @property
    def log_extensions(self) -> str:
        return self._logging.log_extensions

    @property
    def verbose(self) -> bool:
        return self._logging.verbose

    @property
    def quiet(self) -> bool:
        return self._logging.quiet


_ENV: Optional[Environment] = None


def reset_env_caches() -> None:
    """Invalidate cached views of environment variables."""
    global _ENV
    _ENV = None


def get_env() -> Environment:
    global _ENV
    if _ENV is None:
        _ENV = Environment()
    return _ENV
