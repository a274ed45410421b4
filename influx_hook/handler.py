"""Stdlib logging integration: a Handler that fires records through the hook."""

import logging

from influx_hook.hook import InfluxDBHook
from influx_hook.levels import PANIC_LEVELNO, Level
from influx_hook.models import LogEvent

logging.addLevelName(PANIC_LEVELNO, "PANIC")

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

# Loggers whose records would loop back through the write path.
_IGNORED_LOGGERS = ("influx_hook", "urllib3", "requests")


def record_to_event(record: logging.LogRecord) -> LogEvent:
    """Convert a LogRecord into a LogEvent; ``extra=`` attributes become fields."""
    data = {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS
    }
    return LogEvent(
        level=Level.from_levelno(record.levelno),
        message=record.getMessage(),
        fields=data,
    )


class InfluxDBHandler(logging.Handler):
    """Logging handler that writes every accepted record to InfluxDB.

    Delivery failures go through ``handleError``, so ``logging.raiseExceptions``
    decides whether they are reported.
    """

    def __init__(self, hook: InfluxDBHook, level: int = logging.NOTSET):
        super().__init__(level)
        self.hook = hook

    def emit(self, record: logging.LogRecord) -> None:
        if record.name.split(".", 1)[0] in _IGNORED_LOGGERS:
            return
        try:
            event = record_to_event(record)
            if not self.hook.accepts(event.level):
                return
            self.hook.fire(event)
        except Exception:
            self.handleError(record)
