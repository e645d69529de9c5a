from __future__ import annotations

import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Protocol

from env.paths import logs_dir
from .errors import DirectoryUnavailable, InvalidConfiguration

DEFAULT_LOG_EXTENSIONS: tuple[str, ...] = (".log",)


# ---------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class LogContext:
    """
    Where a run keeps its logs.

    root/                      (no module)
    root/<module>/             (module only)
    root/<module>/<profile>/   (module + profile)
    """

    root: Path
    module: Optional[str] = None
    profile: Optional[str] = None


@dataclass(frozen=True)
class LogFileEntry:
    path: Path
    mtime: float
    size: int

    @property
    def name(self) -> str:
        return self.path.name


class LogFileProvider(Protocol):
    directory: Path

    def list_log_files(self) -> list[LogFileEntry]: ...


# ---------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------


def _check_component(kind: str, value: str) -> str:
    if not value or value in (".", "..") or "/" in value or "\\" in value:
        raise InvalidConfiguration(f"Invalid log {kind} name: {value!r}")
    return value


def _ensure_dir(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryUnavailable(path, str(e)) from e
    if not path.is_dir():
        raise DirectoryUnavailable(path, "not a directory")
    return path


def resolve_directory(context: LogContext) -> Path:
    """
    Log directory for a context. Same context, same path.
    The directory exists when this returns.
    """
    path = Path(context.root).expanduser().resolve()

    if context.profile is not None and context.module is None:
        raise InvalidConfiguration("A log profile requires a module")

    if context.module is not None:
        path = path / _check_component("module", context.module)
    if context.profile is not None:
        path = path / _check_component("profile", context.profile)

    return _ensure_dir(path)


def module_logs_dir(module: str) -> Path:
    return resolve_directory(LogContext(root=logs_dir(), module=module))


def profile_logs_dir(module: str, profile: str) -> Path:
    return resolve_directory(
        LogContext(root=logs_dir(), module=module, profile=profile)
    )


# ---------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------


def normalize_extensions(values: str | Iterable[str]) -> tuple[str, ...]:
    if isinstance(values, str):
        values = values.split(",")

    out: list[str] = []
    for raw in values:
        ext = raw.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = f".{ext}"
        if ext not in out:
            out.append(ext)

    if not out:
        raise InvalidConfiguration("At least one log file extension is required")
    return tuple(out)


def list_log_files(
    directory: Path, extensions: Iterable[str] = DEFAULT_LOG_EXTENSIONS
) -> list[LogFileEntry]:
    if not directory.exists():
        return []

    suffixes = normalize_extensions(extensions)

    try:
        candidates = list(directory.iterdir())
    except OSError as e:
        raise DirectoryUnavailable(directory, str(e)) from e

    items: list[LogFileEntry] = []
    for p in candidates:
        # ".log.gz" style suffixes span more than Path.suffix
        if not p.name.lower().endswith(suffixes):
            continue
        try:
            st = p.lstat()
        except OSError:
            # removed between iterdir() and lstat()
            continue
        # regular files only; symlinks and directories are not log files
        if not stat.S_ISREG(st.st_mode):
            continue
        items.append(LogFileEntry(path=p, mtime=st.st_mtime, size=st.st_size))

    return items


class FilesystemLogFileProvider:
    def __init__(
        self,
        directory: Path,
        extensions: Iterable[str] = DEFAULT_LOG_EXTENSIONS,
    ):
        self.directory = Path(directory)
        self.extensions = normalize_extensions(extensions)

    @classmethod
    def from_context(
        cls,
        context: LogContext,
        extensions: Iterable[str] = DEFAULT_LOG_EXTENSIONS,
    ) -> "FilesystemLogFileProvider":
        return cls(resolve_directory(context), extensions)

    def list_log_files(self) -> list[LogFileEntry]:
        return list_log_files(self.directory, self.extensions)

    def __repr__(self) -> str:
        return (
            f"FilesystemLogFileProvider(directory={str(self.directory)!r}, "
            f"extensions={self.extensions!r})"
        )
