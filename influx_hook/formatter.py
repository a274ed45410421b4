"""Parse raw log lines into log events."""

from influx_hook.levels import Level
from influx_hook.models import LogEvent


def parse_log_line(line: str) -> LogEvent | None:
    """Parse a log line in 'YYYY-MM-DD HH:MM:SS LEVEL Message' format.

    The original timestamp is kept in the ``timestamp`` field. Returns None if
    the line is unparseable or names an unknown level.
    """
    stripped = line.strip()
    if not stripped:
        return None

    parts = stripped.split(None, 3)
    if len(parts) < 4:
        return None

    date_str, time_str, level_name, message = parts
    if "-" not in date_str or ":" not in time_str:
        return None
    if not level_name.isalpha():
        return None

    try:
        level = Level.parse(level_name)
    except ValueError:
        return None

    return LogEvent(
        level=level,
        message=message,
        fields={"timestamp": f"{date_str} {time_str}"},
    )
