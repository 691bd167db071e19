"""Level registry: level names, numeric severities and the filtering rule."""

from __future__ import annotations

from types import MappingProxyType
from typing import Literal, Mapping

LevelName = Literal["trace", "debug", "warn", "error", "fatal"]

LOG_LEVELS: Mapping[str, int] = MappingProxyType(
    {
        "fatal": 60,
        "error": 50,
        "warn": 40,
        "debug": 20,
        "trace": 10,
    },
)

DEFAULT_LEVEL: LevelName = "error"


def normalize_level(name: str) -> str:
    """Case-folded lookup form of a user-supplied level name; whitespace is kept."""

    return name.lower()


def severity_of(name: str) -> tuple[int, bool]:
    """Return ``(severity, found)`` for an already normalized level name."""

    severity = LOG_LEVELS.get(name)
    if severity is None:
        return 0, False
    return severity, True


def should_log(severity: int, threshold: int) -> bool:
    """Thresholds are inclusive."""

    return severity >= threshold


class ConfigurationError(ValueError):
    """Raised for a level name outside the registry."""

    def __init__(self, level: str) -> None:
        super().__init__(f"Unknown log level: {level!r}")
        self.level = level


def resolve_severity(name: str) -> int:
    """Normalize and look up a level name, raising on unknown names."""

    severity, found = severity_of(normalize_level(name))
    if not found:
        raise ConfigurationError(name)
    return severity
