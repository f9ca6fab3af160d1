from __future__ import annotations

from typing import Any, Mapping, Optional


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        if not value or any(c.isspace() for c in value) or "=" in value:
            return repr(value)
        return value
    return str(value)


def format_fields(message: str = "", fields: Optional[Mapping[str, Any]] = None) -> str:
    """
    Render a message and key=value pairs the way both events and spans show them.

    The message comes first, then fields in insertion order, space separated.
    """
    parts = [message] if message else []
    for key, value in (fields or {}).items():
        parts.append(f"{key}={_format_value(value)}")
    return " ".join(parts)
