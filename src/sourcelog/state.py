from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .env import LoggingEnvironment
    from .file import RotatingFileWriter

INITIALIZED: bool = False
LOG_DIR: Optional[Path] = None
LOG_FILE_PATH: Optional[Path] = None
WRITER: Optional["RotatingFileWriter"] = None
ENV: Optional["LoggingEnvironment"] = None
HANDLERS: list[logging.Handler] = []
