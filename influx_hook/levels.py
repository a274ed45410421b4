"""Severity levels accepted by the hook."""

import logging
from enum import IntEnum

# Stdlib has no level above CRITICAL; panic sits one step past it.
PANIC_LEVELNO = 60

_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
}


class Level(IntEnum):
    """Ordered most to least severe."""

    PANIC = 0
    FATAL = 1
    ERROR = 2
    WARN = 3
    INFO = 4
    DEBUG = 5

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, name: str) -> "Level":
        """Look up a level by name, case-insensitive. Raises ValueError if unknown."""
        key = name.strip().upper()
        key = _ALIASES.get(key, key)
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown log level: {name!r}") from None

    @classmethod
    def from_levelno(cls, levelno: int) -> "Level":
        """Map a stdlib numeric level onto a severity."""
        if levelno >= PANIC_LEVELNO:
            return cls.PANIC
        if levelno >= logging.CRITICAL:
            return cls.FATAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        return cls.DEBUG


ALL_LEVELS = (
    Level.PANIC,
    Level.FATAL,
    Level.ERROR,
    Level.WARN,
    Level.INFO,
    Level.DEBUG,
)
