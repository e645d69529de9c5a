from __future__ import annotations

"""bootstrap.py

Process bootstrap for logkeeper.

Rules:
1) Only bootstrap is allowed to *mutate* os.environ for shared run context.
2) Call bootstrap_base_env() once at the true entrypoint.
3) Call bootstrap_run_context() after argparse parsing, before init_logging().

Everything else treats environment variables as the source of truth.
"""

import os
from datetime import datetime

from dotenv import load_dotenv

from env import PROJECT_ROOT, reset_env_caches


_BOOTSTRAPPED = False


def bootstrap_base_env(
    *,
    config_dir: str = "config",
    env_file: str = ".env",
    required: bool = False,
) -> None:
    global _BOOTSTRAPPED
    if _BOOTSTRAPPED:
        return

    dotenv_path = PROJECT_ROOT / config_dir / env_file

    if dotenv_path.exists():
        # Shell / CI variables always win over the file.
        load_dotenv(dotenv_path, override=False)
    elif required:
        raise RuntimeError(
            f"Missing required env file: {dotenv_path}\n"
            f"Expected {config_dir}/{env_file} relative to project root."
        )

    os.environ.setdefault(
        "LOGKEEPER_RUN_ID",
        datetime.now().strftime("%Y-%m-%d_%H-%M-%S"),
    )

    reset_env_caches()
    _BOOTSTRAPPED = True


def bootstrap_run_context(
    *,
    command: str,
    profile_name: str | None = None,
    verbose: bool | None = None,
    quiet: bool | None = None,
) -> None:
    """Establish run-scoped context used by logging and retention."""

    os.environ["LOGKEEPER_COMMAND"] = command

    if profile_name:
        os.environ["LOGKEEPER_PROFILE"] = profile_name
    else:
        os.environ.pop("LOGKEEPER_PROFILE", None)

    if verbose is not None:
        os.environ["LOGKEEPER_VERBOSE"] = "1" if verbose else "0"
    if quiet is not None:
        os.environ["LOGKEEPER_QUIET"] = "1" if quiet else "0"

    # Context changes must invalidate cached env views.
    reset_env_caches()
