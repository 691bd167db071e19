"""Process boundary: environment configuration and fatal-level termination."""

from __future__ import annotations

import logging
import os
import sys
from contextlib import suppress
from typing import NoReturn

from pydantic import JsonValue

from levellog.config.settings import LoggerSettings, get_settings
from levellog.core.levels import LOG_LEVELS, ConfigurationError
from levellog.core.logger import Logger, Outcome, Sink
from levellog.core.record import Fields

LOGGER = logging.getLogger(__name__)

FATAL_EXIT_STATUS = 1


def exit_process(status: int) -> NoReturn:
    """Flush standard streams and end the process from any thread."""

    for stream in (sys.stdout, sys.stderr):
        with suppress(OSError, ValueError):
            stream.flush()
    os._exit(status)


class ProcessLogger(Logger):
    """Logger whose fatal records end the process once written."""

    def _emit(self, severity: int, fields: Fields | None, message: JsonValue) -> Outcome:
        try:
            return super()._emit(severity, fields, message)
        finally:
            if severity == LOG_LEVELS["fatal"]:
                exit_process(FATAL_EXIT_STATUS)


def new_logger(name: str, settings: LoggerSettings | None = None, sink: Sink | None = None) -> ProcessLogger:
    """Build the logger for a named component from ``LOG_LEVEL``.

    An unknown level is reported as a fatal record by a separate logger that
    is fully configured at the ``fatal`` threshold, then the process exits.
    """

    settings = settings or get_settings()
    try:
        return ProcessLogger(name, settings.log_level, sink)
    except ConfigurationError as error:
        LOGGER.debug("Rejected LOG_LEVEL", extra={"log_level": error.level})
        reporter = ProcessLogger(name, "fatal", sink)
        reporter.fatalf({"log_level": error.level}, "Bad LOG_LEVEL")
        # Only reached when exit_process has been replaced.
        raise
