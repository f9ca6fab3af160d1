from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# ------------------------------------------------------------
# Errors / helpers
# ------------------------------------------------------------


class ConfigError(RuntimeError):
    pass


def _as_bool(v: str) -> bool:
    return v.strip().lower() in {"1", "true", "yes", "on"}


def _as_int(v: str, default: int) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


# ------------------------------------------------------------
# Logging environment
# ------------------------------------------------------------


@dataclass(frozen=True)
class LoggingEnvironment:
    logs_dir: Path
    log_prefix: str
    log_level: str
    log_retention: int
    verbose: bool
    quiet: bool


def get_logging_env() -> LoggingEnvironment:
    raw_dir = os.environ.get("SOURCELOG_LOGS_DIR", "logs")
    if not raw_dir.strip():
        raise ConfigError("SOURCELOG_LOGS_DIR is set but empty")

    return LoggingEnvironment(
        logs_dir=Path(raw_dir).expanduser().resolve(),
        # An empty prefix is allowed: every file in logs_dir then counts
        # toward retention.
        log_prefix=os.environ.get("SOURCELOG_LOG_PREFIX", "sourcelog"),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        log_retention=_as_int(os.environ.get("LOG_RETENTION", "30"), 30),
        verbose=_as_bool(os.environ.get("SOURCELOG_VERBOSE", "0")),
        quiet=_as_bool(os.environ.get("SOURCELOG_QUIET", "0")),
    )
