from __future__ import annotations

import argparse
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.table import Table

from env import logs_dir
from logger import (
    InvalidConfiguration,
    LogContext,
    LogFileEntry,
    resolve_directory,
)

RENDER = Console(highlight=False, soft_wrap=True)


# ----------------------------
# Help dispatch (subparser-local)
# ----------------------------


def dispatch_subparser_help(
    parser: argparse.ArgumentParser, path: list[str] | None
) -> int:
    """
    Implements consistent `X help [subcmd ...]` behavior for a subtree parser.
    """
    if not path:
        parser.print_help()
        return 0

    try:
        parser.parse_args(path + ["--help"])
    except SystemExit:
        pass
    return 0


def add_target_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("--module", help="Module name (logs/<module>/)")
    p.add_argument(
        "--profile", help="Profile name (logs/<module>/<profile>/, needs --module)"
    )
    p.add_argument(
        "--dir", help="Explicit log directory (not with --module or --profile)"
    )


# ----------------------------
# Logs filesystem helpers
# ----------------------------


def resolve_log_dir(
    *, module: str | None, profile: str | None, explicit: str | None
) -> Path:
    if explicit:
        if module or profile:
            raise InvalidConfiguration(
                "--dir cannot be combined with --module or --profile"
            )
        return resolve_directory(LogContext(root=Path(explicit)))
    return resolve_directory(LogContext(root=logs_dir(), module=module, profile=profile))


def find_log_file(log_dir: Path, name: str) -> Path | None:
    if not log_dir.exists():
        return None

    candidates = [
        log_dir / name,
        log_dir / f"{name}.log",
    ]
    for p in candidates:
        if p.exists() and p.is_file():
            return p

    for p in log_dir.iterdir():
        if p.is_file() and p.stem == name:
            return p

    return None


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def print_tail(path: Path, lines: int) -> None:
    try:
        data = read_text(path).splitlines()
    except OSError as e:
        print(f"[error reading log] {e}")
        return

    tail = data[-lines:] if lines > 0 else data
    for line in tail:
        print(line)


def newest_first(entries: list[LogFileEntry]) -> list[LogFileEntry]:
    return sorted(entries, key=lambda e: (e.mtime, e.name), reverse=True)


def format_mtime(ts: float) -> str:
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M:%S")


# ----------------------------
# CLI output helpers
# ----------------------------


def print_table(headers: list[str], rows: list[list[str]]) -> None:
    if not rows:
        RENDER.print("(no results)")
        return

    table = Table(header_style="bold")
    for h in headers:
        table.add_column(h, no_wrap=True)
    for row in rows:
        table.add_row(*(str(c) for c in row))

    RENDER.print(table)
