from __future__ import annotations

import logging
from dataclasses import replace

from .console import build_console_handler
from .context import Span, SpanFilter, current_spans, span
from .env import ConfigError, LoggingEnvironment, get_logging_env
from .fields import format_fields
from .file import RotatingFileWriter, SinkHandler, build_file_handler
from .format import SourceFormatter, render_spans
from .levels import TRACE, level_to_int
from .retention import enforce_retention, prune_logs, scan_logs
from . import state as _state

__all__ = [
    "TRACE",
    "ConfigError",
    "LoggingEnvironment",
    "RotatingFileWriter",
    "SinkHandler",
    "SourceFormatter",
    "Span",
    "SpanFilter",
    "build_console_handler",
    "build_file_handler",
    "current_spans",
    "enforce_retention",
    "format_fields",
    "get_logger",
    "get_logging_env",
    "init_logging",
    "prune_logs",
    "render_spans",
    "scan_logs",
    "shutdown_logging",
    "span",
]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _detach_handlers(root: logging.Logger) -> None:
    # Only handlers installed here; others (e.g. test capture) stay put.
    for h in _state.HANDLERS:
        root.removeHandler(h)
        h.close()
    _state.HANDLERS = []


def _same_outputs(old: LoggingEnvironment | None, new: LoggingEnvironment) -> bool:
    if old is None:
        return False
    return replace(old, log_level=new.log_level, verbose=new.verbose) == new


def init_logging(env: LoggingEnvironment | None = None) -> None:
    """
    Initialize logging for the entire process.

    - Handlers are attached ONLY to the root logger.
    - Named loggers inherit via propagation.
    - Safe to call multiple times. When only the level (or verbose) changed,
      the run keeps its log file and handlers and the new level is applied.
      Any other change (dir, prefix, retention, quiet) rebuilds the handlers.
    """
    env = env or get_logging_env()
    root = logging.getLogger()

    # Base level from env, but verbose forces DEBUG everywhere.
    root_level = logging.DEBUG if env.verbose else level_to_int(env.log_level)

    if _state.INITIALIZED and _same_outputs(_state.ENV, env):
        root.setLevel(root_level)
        for h in _state.HANDLERS:
            if not isinstance(h, SinkHandler):
                h.setLevel(root_level)
        _state.ENV = env
        return

    writer = RotatingFileWriter(env.log_retention, env.logs_dir, env.log_prefix)

    _detach_handlers(root)
    root.setLevel(root_level)

    handlers: list[logging.Handler] = [build_file_handler(writer)]
    if not env.quiet:
        handlers.append(build_console_handler(root_level))

    for h in handlers:
        root.addHandler(h)
    _state.HANDLERS = handlers

    _state.INITIALIZED = True
    _state.LOG_DIR = env.logs_dir
    _state.LOG_FILE_PATH = writer.path
    _state.WRITER = writer
    _state.ENV = env


def shutdown_logging() -> None:
    """Detach the handlers init_logging installed and close the run's log file."""
    _detach_handlers(logging.getLogger())
    _state.INITIALIZED = False
    _state.LOG_DIR = None
    _state.LOG_FILE_PATH = None
    _state.WRITER = None
    _state.ENV = None
