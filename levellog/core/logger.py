"""Leveled JSON logger with a lock-guarded, reusable write buffer."""

from __future__ import annotations

import io
import logging
import sys
import threading
from typing import Any, Literal, Protocol

from pydantic import JsonValue

from levellog.core.levels import DEFAULT_LEVEL, LOG_LEVELS, resolve_severity, should_log
from levellog.core.record import Fields, build_record, serialize

LOGGER = logging.getLogger(__name__)

Outcome = Literal["filtered", "written", "terminate"]


class Sink(Protocol):
    """Destination for serialized lines; text streams receive decoded lines."""

    def write(self, data: bytes, /) -> Any: ...


def default_sink() -> Sink:
    """Binary stream behind the current standard error, or the stream itself
    when it has none (for example under ``contextlib.redirect_stderr``)."""

    return getattr(sys.stderr, "buffer", sys.stderr)


class Logger:
    """Filter, format and write records for one named component.

    Emit methods never raise. They return an :data:`Outcome`; ``"terminate"``
    is returned after a fatal record has been written and it is up to the
    caller's boundary to end the process (see ``levellog.bootstrap``).
    """

    def __init__(self, name: str, configured_level: str | None = None, sink: Sink | None = None) -> None:
        self.name = name
        self.threshold = resolve_severity(configured_level if configured_level is not None else DEFAULT_LEVEL)
        self.sink = sink if sink is not None else default_sink()
        self.dropped_writes = 0
        self._buffer = bytearray()
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, threshold={self.threshold})"

    def should_log(self, severity: int) -> bool:
        """Whether a record at ``severity`` passes this logger's threshold."""

        return should_log(severity, self.threshold)

    def log(self, level: str, message: JsonValue, fields: Fields | None = None) -> Outcome:
        """Emit at a level given by name, in any case."""

        return self._emit(resolve_severity(level), fields, message)

    def output(self, line: str | bytes) -> None:
        """Write a preformatted line, adding the newline if it is missing."""

        data = line.encode() if isinstance(line, str) else line
        if data.endswith(b"\n"):
            self._write(data)
        else:
            self._write(data, b"\n")

    def fatal(self, message: JsonValue) -> Outcome:
        return self.fatalf(None, message)

    def error(self, message: JsonValue) -> Outcome:
        return self.errorf(None, message)

    def warn(self, message: JsonValue) -> Outcome:
        return self.warnf(None, message)

    def debug(self, message: JsonValue) -> Outcome:
        return self.debugf(None, message)

    def trace(self, message: JsonValue) -> Outcome:
        return self.tracef(None, message)

    def fatalf(self, fields: Fields | None, message: JsonValue) -> Outcome:
        return self._emit(LOG_LEVELS["fatal"], fields, message)

    def errorf(self, fields: Fields | None, message: JsonValue) -> Outcome:
        return self._emit(LOG_LEVELS["error"], fields, message)

    def warnf(self, fields: Fields | None, message: JsonValue) -> Outcome:
        return self._emit(LOG_LEVELS["warn"], fields, message)

    def debugf(self, fields: Fields | None, message: JsonValue) -> Outcome:
        return self._emit(LOG_LEVELS["debug"], fields, message)

    def tracef(self, fields: Fields | None, message: JsonValue) -> Outcome:
        return self._emit(LOG_LEVELS["trace"], fields, message)

    def _emit(self, severity: int, fields: Fields | None, message: JsonValue) -> Outcome:
        if not self.should_log(severity):
            return "filtered"
        line = serialize(build_record(self.name, severity, fields, message))
        self._write(line, b"\n")
        return "terminate" if severity == LOG_LEVELS["fatal"] else "written"

    def _write(self, *chunks: bytes) -> None:
        """Copy ``chunks`` into the shared buffer and hand it to the sink in one write.

        The buffer only grows, so its storage is reused by every later line
        that fits in it.
        """

        size = sum(len(chunk) for chunk in chunks)
        with self._lock:
            try:
                if len(self._buffer) < size:
                    self._buffer.extend(bytes(size - len(self._buffer)))
                offset = 0
                for chunk in chunks:
                    self._buffer[offset : offset + len(chunk)] = chunk
                    offset += len(chunk)
                with memoryview(self._buffer) as whole, whole[:size] as line:
                    if isinstance(self.sink, io.TextIOBase):
                        self.sink.write(bytes(line).decode("utf-8", "replace"))
                    else:
                        self.sink.write(line)
                flush = getattr(self.sink, "flush", None)
                if flush is not None:
                    flush()
            except Exception as error:  # noqa: BLE001
                # Writes are best effort; the caller never sees a dropped line.
                self.dropped_writes += 1
                LOGGER.debug("Log sink write failed", extra={"logger_name": self.name, "error": str(error)})
