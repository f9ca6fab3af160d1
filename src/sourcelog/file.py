from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .context import SpanFilter
from .format import SourceFormatter
from .retention import enforce_retention

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


class RotatingFileWriter:
    """
    Byte sink over a fresh `{prefix}.{timestamp}` file in `directory`.

    On construction the directory is created if needed and older files
    sharing the prefix are pruned so that at most `max_files` remain,
    counting the new one. The file is never rotated afterwards.
    """

    def __init__(self, max_files: int, directory: Union[str, Path], prefix: str):
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)

        max_files = max(1, max_files)
        enforce_retention(directory, prefix, max_files)

        stamp = datetime.now().strftime(TIMESTAMP_FORMAT)
        self.path = directory / f"{prefix}.{stamp}"
        self._sink: BinaryIO = open(self.path, "wb")

    def _check_open(self) -> None:
        if self._sink.closed:
            raise OSError(f"log file {self.path} is closed")

    def write(self, data: bytes) -> int:
        self._check_open()
        return self._sink.write(data)

    def flush(self) -> None:
        self._check_open()
        self._sink.flush()

    def close(self) -> None:
        self._sink.close()

    @property
    def closed(self) -> bool:
        return self._sink.closed

    def __enter__(self) -> "RotatingFileWriter":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class SinkHandler(logging.Handler):
    """
    Writes formatted records to a byte sink, one UTF-8 line each.
    """

    terminator = "\n"

    def __init__(self, sink: RotatingFileWriter, level: int = logging.NOTSET):
        super().__init__(level)
        self.sink = sink

    def flush(self) -> None:
        self.acquire()
        try:
            if not self.sink.closed:
                self.sink.flush()
        finally:
            self.release()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record) + self.terminator
            self.sink.write(msg.encode("utf-8"))
            self.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        self.acquire()
        try:
            if not self.sink.closed:
                self.sink.flush()
                self.sink.close()
        finally:
            self.release()
            super().close()


def build_file_handler(
    writer: RotatingFileWriter, formatter: Optional[logging.Formatter] = None
) -> SinkHandler:
    handler = SinkHandler(writer)
    handler.setFormatter(formatter or SourceFormatter(color_system=None))
    handler.addFilter(SpanFilter())
    return handler
