from __future__ import annotations

import logging
import sys
from typing import IO, Optional

from .context import SpanFilter
from .format import SourceFormatter


def build_console_handler(
    level: int = logging.NOTSET, stream: Optional[IO[str]] = None
) -> logging.StreamHandler:
    # Colors only when rich says the stream can show them
    stream = stream or sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(SourceFormatter.for_stream(stream))
    handler.addFilter(SpanFilter())
    return handler
