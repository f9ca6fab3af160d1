from __future__ import annotations

import logging

TRACE = 5

logging.addLevelName(TRACE, "TRACE")

# Five-level model, most verbose first. Anything above ERROR renders as ERROR.
LEVELS: tuple[tuple[int, str], ...] = (
    (TRACE, "TRACE"),
    (logging.DEBUG, "DEBUG"),
    (logging.INFO, "INFO"),
    (logging.WARNING, "WARN"),
    (logging.ERROR, "ERROR"),
)

LEVEL_STYLES = {
    "TRACE": "magenta",
    "DEBUG": "blue",
    "INFO": "green",
    "WARN": "yellow",
    "ERROR": "red",
}

_ALIASES = {
    "WARN": logging.WARNING,
    "TRACE": TRACE,
}


def level_name(levelno: int) -> str:
    for threshold, name in reversed(LEVELS):
        if levelno >= threshold:
            return name
    return "TRACE"


def level_to_int(level: str | int) -> int:
    if isinstance(level, int):
        return level
    name = str(level).strip().upper()
    if name in _ALIASES:
        return _ALIASES[name]
    lvl = logging.getLevelName(name)
    return lvl if isinstance(lvl, int) else logging.INFO
