from __future__ import annotations

import argparse

from cli.common import (
    RENDER,
    add_target_arguments,
    dispatch_subparser_help,
    find_log_file,
    format_mtime,
    newest_first,
    print_table,
    print_tail,
    resolve_log_dir,
)
from env import ConfigError, get_env
from logger import (
    DirectoryUnavailable,
    FilesystemLogFileProvider,
    InvalidConfiguration,
    LogFileCleaner,
    get_logger,
)

log = get_logger("logkeeper.cli.logs")

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_CONFIG = 2


def build_logs_parser(subparsers: argparse._SubParsersAction) -> None:
    logs = subparsers.add_parser("logs", help="Log utilities")
    lsub = logs.add_subparsers(dest="logs_cmd", required=True)

    help_p = lsub.add_parser("help", help="Show help for logs")
    help_p.add_argument("path", nargs="*", help="Subcommand path (e.g. list, clean)")
    help_p.set_defaults(action="help", _help_parser=logs)

    list_p = lsub.add_parser("list", help="List log files, newest first")
    add_target_arguments(list_p)
    list_p.add_argument("--ext", help="Comma separated log extensions")
    list_p.set_defaults(action="list")

    show_p = lsub.add_parser("show", help="Show a log file (tail)")
    show_p.add_argument("name", help="Log filename or stem")
    add_target_arguments(show_p)
    show_p.add_argument("--tail", type=int, default=120, help="Lines from end")
    show_p.set_defaults(action="show")

    clean_p = lsub.add_parser(
        "clean", help="Delete the oldest log files beyond the retention limit"
    )
    add_target_arguments(clean_p)
    clean_p.add_argument(
        "--keep", type=int, help="Number of newest files to keep (default: LOG_RETENTION)"
    )
    clean_p.add_argument("--ext", help="Comma separated log extensions")
    clean_p.add_argument(
        "--dry-run", action="store_true", help="Only show what would be deleted"
    )
    clean_p.set_defaults(action="clean")


def _provider(args: argparse.Namespace) -> FilesystemLogFileProvider:
    log_dir = resolve_log_dir(
        module=getattr(args, "module", None),
        profile=getattr(args, "profile", None),
        explicit=getattr(args, "dir", None),
    )
    extensions = getattr(args, "ext", None) or get_env().log_extensions
    return FilesystemLogFileProvider(log_dir, extensions)


def handle_logs(args: argparse.Namespace) -> int:
    if args.action == "help":
        return dispatch_subparser_help(
            args._help_parser, list(getattr(args, "path", []) or [])
        )

    try:
        if args.action == "list":
            return _handle_list(args)
        if args.action == "show":
            return _handle_show(args)
        if args.action == "clean":
            return _handle_clean(args)
    except (InvalidConfiguration, ConfigError) as e:
        log.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG
    except DirectoryUnavailable as e:
        log.error(str(e))
        return EXIT_CONFIG

    raise SystemExit(f"Unknown logs action: {args.action}")


def _handle_list(args: argparse.Namespace) -> int:
    provider = _provider(args)
    rows = [
        [e.name, format_mtime(e.mtime), f"{e.size} bytes"]
        for e in newest_first(provider.list_log_files())
    ]
    print_table(["name", "modified", "size"], rows)
    return EXIT_OK


def _handle_show(args: argparse.Namespace) -> int:
    provider = _provider(args)
    path = find_log_file(provider.directory, args.name)
    if not path:
        print(f"Log not found: {args.name}")
        return EXIT_PARTIAL
    print_tail(path, int(args.tail))
    return EXIT_OK


def _handle_clean(args: argparse.Namespace) -> int:
    env = get_env()
    keep = args.keep if args.keep is not None else env.log_retention

    provider = _provider(args)
    cleaner = LogFileCleaner(provider, keep)

    if args.dry_run or env.dry_run:
        victims = cleaner.plan()
        RENDER.print(
            f"DRY RUN: {len(victims)} file(s) would be deleted from "
            f"{provider.directory} (keep={keep})"
        )
        for v in victims:
            print(f"  {v.name}  {format_mtime(v.mtime)}")
        return EXIT_OK

    result = cleaner.clean()

    RENDER.print(
        f"Deleted {len(result.deleted)} file(s), kept {len(result.kept)} "
        f"in {provider.directory}"
    )
    for failure in result.failures:
        print(f"  failed: {failure.path.name} ({failure.reason})")

    return EXIT_OK if result.ok else EXIT_PARTIAL
