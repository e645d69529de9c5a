#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys

from bootstrap import bootstrap_base_env, bootstrap_run_context


def _dispatch_help(path: list[str]) -> int:
    # Support:
    #   logkeeper help
    #   logkeeper help logs clean
    try:
        build_parser().parse_args(path + ["--help"])
    except SystemExit:
        pass
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="logkeeper")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug output")
    p.add_argument("-q", "--quiet", action="store_true", help="No console logging")
    p.add_argument("--profile", dest="run_profile", help="Profile for logkeeper's own logs")

    sub = p.add_subparsers(dest="command", required=True)

    help_cmd = sub.add_parser("help", help="Show help")
    help_cmd.add_argument("path", nargs="*", help="Command path to show help for")
    help_cmd.set_defaults(_help=True)

    # Keep imports inside builder to avoid early side effects.
    from cli.cli_env import build_env_parser
    from cli.cli_logs import build_logs_parser

    build_env_parser(sub)
    build_logs_parser(sub)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    # Load .env and base environment early
    bootstrap_base_env(config_dir="config", env_file=".env", required=False)

    parser = build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "_help", False):
        return _dispatch_help(list(args.path))

    # Stamp run context early (so subprocesses inherit it)
    bootstrap_run_context(
        command=args.command,
        profile_name=args.run_profile,
        verbose=True if args.verbose else None,
        quiet=True if args.quiet else None,
    )

    # Initialize logging AFTER run-context env stamping
    from env import ConfigError
    from logger import RetentionError, init_logging, get_logger

    try:
        init_logging()
    except (ConfigError, RetentionError) as e:
        print(f"logkeeper: cannot initialize logging: {e}", file=sys.stderr)
        return 2

    log = get_logger(__name__)
    log.debug(f"Command: {args.command}")

    if args.command == "env":
        from cli.cli_env import handle_env

        return handle_env(args)

    if args.command == "logs":
        from cli.cli_logs import handle_logs

        return handle_logs(args)

    raise RuntimeError(f"Unknown command: {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())
