from __future__ import annotations

from typing import IO, Optional

from rich.color import ColorSystem
from rich.console import COLOR_SYSTEMS, Console
from rich.style import Style


def color_system_for(stream: IO[str]) -> Optional[ColorSystem]:
    """
    Ask rich what the stream can display. None means plain text.

    Honors NO_COLOR / FORCE_COLOR and TTY detection the same way rich does.
    """
    name = Console(file=stream).color_system
    if name is None:
        return None
    return COLOR_SYSTEMS.get(name)


def styled(text: str, style: str, color_system: Optional[ColorSystem]) -> str:
    if color_system is None:
        return text
    return Style.parse(style).render(text, color_system=color_system)
