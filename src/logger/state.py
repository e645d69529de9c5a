from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .retention import CleanResult

INITIALIZED: bool = False
LOG_FILE_PATH: Optional[Path] = None
LAST_CLEAN: Optional["CleanResult"] = None
