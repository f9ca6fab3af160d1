from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional

from .fields import format_fields


@dataclass(frozen=True)
class Span:
    name: str
    fields: Mapping[str, Any] = field(default_factory=dict)
    # Rendered once on entry; None only if the span never went through span().
    formatted_fields: Optional[str] = None


_SPANS: ContextVar[tuple[Span, ...]] = ContextVar("sourcelog_spans", default=())


def current_spans() -> tuple[Span, ...]:
    """Active spans, root first."""
    return _SPANS.get()


@contextmanager
def span(name: str, /, **fields: Any) -> Iterator[Span]:
    """
    Enter a named scope. Records logged inside carry it in their span stack.

        with span("request", id=7):
            log.info("handled")   # ... request{id=7}: handled
    """
    entered = Span(name=name, fields=fields, formatted_fields=format_fields("", fields))
    token = _SPANS.set(_SPANS.get() + (entered,))
    try:
        yield entered
    finally:
        _SPANS.reset(token)


class SpanFilter(logging.Filter):
    """
    Attaches the active span stack to each LogRecord.
    Does not mutate message, args, or level.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "spans"):
            record.spans = current_spans()
        return True
