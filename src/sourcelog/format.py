from __future__ import annotations

import logging
from datetime import datetime
from email.utils import format_datetime
from typing import IO, Callable, Iterable, Optional

from rich.color import ColorSystem

from .context import Span, current_spans
from .fields import format_fields
from .levels import LEVEL_STYLES, level_name
from .style import color_system_for, styled


def _local_now() -> datetime:
    return datetime.now().astimezone()


def render_spans(spans: Iterable[Span]) -> str:
    out = []
    for s in spans:
        # span() always caches formatted fields on entry
        if s.formatted_fields is None:
            raise AssertionError(f"span {s.name!r} has no formatted fields")
        out.append(s.name)
        if s.formatted_fields:
            out.append("{" + s.formatted_fields + "}")
        out.append(": ")
    return "".join(out)


class SourceFormatter(logging.Formatter):
    """
    One line per record, with the callsite of the logging call:

        Wed, 12 Nov 1997 09:55:06 -0600 INFO [main.py:74]: request{id=7}: Hello World!

    Timestamp is dim, level is colored by severity, [file:line] is cyan.
    With color_system=None every piece is plain text.
    """

    def __init__(
        self,
        color_system: Optional[ColorSystem] = None,
        clock: Callable[[], datetime] = _local_now,
    ):
        super().__init__()
        self.color_system = color_system
        self.clock = clock

    @classmethod
    def for_stream(cls, stream: IO[str], **kwargs) -> "SourceFormatter":
        return cls(color_system=color_system_for(stream), **kwargs)

    def format(self, record: logging.LogRecord) -> str:
        level = level_name(record.levelno)
        file = getattr(record, "filename", None) or ""
        line = getattr(record, "lineno", None) or 0

        head = " ".join(
            (
                styled(format_datetime(self.clock()), "dim", self.color_system),
                styled(level, LEVEL_STYLES[level], self.color_system),
                styled(f"[{file}:{line}]", "cyan", self.color_system),
            )
        )

        spans = getattr(record, "spans", None)
        if spans is None:
            spans = current_spans()

        fields = dict(getattr(record, "fields", None) or {})
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            fields.setdefault("error", f"{type(exc).__name__}: {exc}")

        return f"{head}: {render_spans(spans)}{format_fields(record.getMessage(), fields)}"

    def format_event(self, record: logging.LogRecord, out: IO[str]) -> None:
        out.write(self.format(record) + "\n")
