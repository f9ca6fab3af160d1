from __future__ import annotations

import logging
import stat
from pathlib import Path

log = logging.getLogger(__name__)


def scan_logs(log_dir: Path, prefix: str) -> list[Path]:
    """
    Regular files directly inside log_dir whose name starts with prefix,
    sorted by name (oldest first for timestamp-suffixed names).

    Symlinks and directories are ignored. Entries that can't be inspected
    are skipped.
    """
    logs: list[Path] = []
    try:
        entries = list(Path(log_dir).iterdir())
    except OSError:
        return logs

    for path in entries:
        if not path.name.startswith(prefix):
            continue
        try:
            mode = path.lstat().st_mode
        except OSError:
            continue
        if stat.S_ISREG(mode):
            logs.append(path)

    return sorted(logs, key=lambda p: p.name)


def prune_logs(logs: list[Path], max_files: int) -> list[Path]:
    """
    Delete the oldest logs so that, with one new file added, at most
    max_files remain. Deletion failures are logged and skipped.
    """
    max_files = max(1, max_files)
    if len(logs) < max_files:
        return []

    removed: list[Path] = []
    for old in logs[: len(logs) - max_files + 1]:
        try:
            old.unlink()
        except OSError as e:
            log.warning("Could not remove old log %s: %s", old, e)
            continue
        removed.append(old)
    return removed


def enforce_retention(log_dir: Path, prefix: str, max_files: int) -> list[Path]:
    return prune_logs(scan_logs(log_dir, prefix), max_files)
