import logging
import os
import sys

import pytest

MAX_FILES = 10


@pytest.fixture(autouse=True)
def clean_env_and_modules(tmp_path, monkeypatch):
    """
    Ensure tests don't leak env, logger state, or cached path resolution.
    """

    keys = [
        "LOGKEEPER_LOGS_DIR",
        "LOGKEEPER_COMMAND",
        "LOGKEEPER_PROFILE",
        "LOGKEEPER_RUN_ID",
        "LOGKEEPER_VERBOSE",
        "LOGKEEPER_QUIET",
        "LOGKEEPER_DRY_RUN",
        "LOG_LEVEL",
        "LOG_RETENTION",
        "LOG_EXTENSIONS",
    ]
    for k in keys:
        monkeypatch.delenv(k, raising=False)

    # Never write into the project's own logs/
    monkeypatch.setenv("LOGKEEPER_LOGS_DIR", str(tmp_path / "logs-root"))

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    # Force re-import of env, logger and cli modules
    for mod in [
        "bootstrap",
        "logkeeper",
        "env",
        "env.env",
        "env.paths",
        "logger",
        "logger.state",
        "logger.errors",
        "logger.log_paths",
        "logger.file",
        "logger.console",
        "logger.retention",
        "cli",
        "cli.common",
        "cli.cli_env",
        "cli.cli_logs",
    ]:
        sys.modules.pop(mod, None)


@pytest.fixture
def log_dir(tmp_path):
    """
    0.log .. 9.log, each holding its index, modified 10 seconds apart.
    """
    d = tmp_path / "logs"
    d.mkdir()
    for i in range(MAX_FILES):
        p = d / f"{i}.log"
        p.write_text(str(i))
        ts = i * 10
        os.utime(p, (ts, ts))

    assert len(list(d.iterdir())) == MAX_FILES
    return d
