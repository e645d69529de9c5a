from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from .errors import DeletionFailed, InvalidConfiguration
from .log_paths import (
    DEFAULT_LOG_EXTENSIONS,
    FilesystemLogFileProvider,
    LogFileEntry,
    LogFileProvider,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleanResult:
    kept: tuple[LogFileEntry, ...] = ()
    deleted: tuple[LogFileEntry, ...] = ()
    failures: tuple[DeletionFailed, ...] = ()

    @property
    def ok(self) -> bool:
        # a file someone else already removed is an acceptable end state
        return all(f.missing for f in self.failures)


def _oldest_first(entry: LogFileEntry) -> tuple[float, str]:
    return entry.mtime, entry.name


def select_victims(entries: Sequence[LogFileEntry], keep: int) -> list[LogFileEntry]:
    """
    Oldest entries beyond the newest `keep`.
    Equal mtimes are ordered by file name.
    """
    if len(entries) <= keep:
        return []
    ordered = sorted(entries, key=_oldest_first)
    return ordered[: len(ordered) - keep]


class LogFileCleaner:
    """
    Keeps the `max_log_file_count` most recently modified log files
    of a provider's directory and deletes the rest.

    Each clean() is an independent pass over a fresh listing.
    """

    def __init__(self, provider: LogFileProvider, max_log_file_count: int):
        if isinstance(max_log_file_count, bool) or not isinstance(
            max_log_file_count, int
        ):
            raise InvalidConfiguration(
                f"Log retention must be an integer, got {max_log_file_count!r}"
            )
        if max_log_file_count < 0:
            raise InvalidConfiguration(
                f"Log retention must be >= 0, got {max_log_file_count}"
            )

        self.provider = provider
        self.max_log_file_count = max_log_file_count

    def plan(self) -> list[LogFileEntry]:
        """Files the next clean() would delete, oldest first."""
        return select_victims(self.provider.list_log_files(), self.max_log_file_count)

    def clean(self) -> CleanResult:
        entries = self.provider.list_log_files()
        victims = select_victims(entries, self.max_log_file_count)

        if not victims:
            log.debug(
                f"Retention: {len(entries)} log file(s) in {self.provider.directory}, "
                f"limit {self.max_log_file_count}; nothing to delete"
            )
            return CleanResult(kept=tuple(entries))

        victim_paths = {v.path for v in victims}
        kept = tuple(e for e in entries if e.path not in victim_paths)

        deleted: list[LogFileEntry] = []
        failures: list[DeletionFailed] = []

        for victim in victims:
            try:
                victim.path.unlink()
            except FileNotFoundError:
                log.debug(f"Retention: {victim.name} already removed")
                failures.append(
                    DeletionFailed(victim.path, "already removed", missing=True)
                )
                continue
            except OSError as e:
                log.warning(f"Retention: could not delete {victim.path}: {e}")
                failures.append(DeletionFailed(victim.path, str(e)))
                continue

            log.debug(f"Retention: deleted {victim.name}")
            deleted.append(victim)

        log.info(
            f"Retention: deleted {len(deleted)} of {len(victims)} log file(s) "
            f"in {self.provider.directory} (keep={self.max_log_file_count})"
        )

        return CleanResult(kept=kept, deleted=tuple(deleted), failures=tuple(failures))


def enforce_retention(
    log_dir: Path,
    keep: int,
    extensions: Iterable[str] = DEFAULT_LOG_EXTENSIONS,
) -> CleanResult:
    provider = FilesystemLogFileProvider(log_dir, extensions)
    return LogFileCleaner(provider, keep).clean()
