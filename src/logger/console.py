from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from env import get_logging_env

# Console used by RichHandler (stdout so subprocess-forwarding works)
UI_CONSOLE = Console(
    file=sys.stdout,
    force_terminal=True,
    soft_wrap=True,
)


class ConsoleGateFilter(logging.Filter):
    """
    Drop console output once quiet mode is switched on.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return not get_logging_env().quiet


def build_console_handler(level: int = logging.NOTSET) -> logging.Handler:
    handler = RichHandler(
        level=level,
        console=UI_CONSOLE,
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
    )

    # RichHandler renders the level column; the formatter must not repeat it.
    handler.setFormatter(logging.Formatter("%(message)s"))

    handler.addFilter(ConsoleGateFilter())
    return handler
