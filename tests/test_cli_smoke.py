import subprocess
import sys
from pathlib import Path

SRC = Path(__file__).resolve().parent.parent / "src"


def _run(*args):
    return subprocess.run(
        [sys.executable, "-m", "logkeeper", *args],
        capture_output=True,
        text=True,
        cwd=SRC,
    )


def test_logs_help_runs():
    assert _run("logs", "--help").returncode == 0


def test_logs_clean_help_runs():
    result = _run("logs", "clean", "--help")
    assert result.returncode == 0
    assert "--keep" in result.stdout
