"""Log events in, time-series points out."""

import datetime
import json
from dataclasses import dataclass, field
from typing import Any

from werkzeug.wrappers import Request

from influx_hook.levels import Level

MEASUREMENT = "logrus"
PRECISION = "s"

_SCALARS = (str, int, float, bool)


@dataclass
class LogEvent:
    """One structured log event as produced by the logging pipeline."""

    level: Level
    message: str
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass
class Point:
    """A single time-series record written to the database."""

    measurement: str
    tags: dict[str, str]
    fields: dict[str, Any]
    time: datetime.datetime
    precision: str = PRECISION

    def to_dict(self) -> dict:
        """Payload for the client. Non-scalar field values are JSON-encoded."""
        return {
            "measurement": self.measurement,
            "tags": dict(self.tags),
            "time": self.time,
            "fields": {key: encode_field(value) for key, value in self.fields.items()},
        }


def summarize_request(req: Request) -> dict:
    """The parts of an HTTP request worth keeping alongside a log line."""
    return {
        "method": req.method,
        "url": req.url,
        "query_string": req.query_string.decode("latin-1"),
        "remote_addr": req.remote_addr,
        "headers": dict(req.headers),
    }


def _json_default(value: Any) -> Any:
    if isinstance(value, Request):
        return summarize_request(value)
    return str(value)


def _stringify_keys(value: Any, seen: frozenset = frozenset()) -> Any:
    """Copy nested dicts/lists with every mapping key turned into a str."""
    if isinstance(value, (dict, list, tuple)):
        if id(value) in seen:
            raise ValueError("Circular reference detected")
        seen = seen | {id(value)}
        if isinstance(value, dict):
            return {str(key): _stringify_keys(item, seen) for key, item in value.items()}
        return [_stringify_keys(item, seen) for item in value]
    return value


def encode_field(value: Any) -> Any:
    """InfluxDB fields hold scalars only; anything else becomes a JSON string.

    Mapping keys are stringified first. Structures JSON still cannot encode
    (circular references) fall back to ``str(value)``.
    """
    if isinstance(value, _SCALARS):
        return value
    try:
        return json.dumps(
            _stringify_keys(value),
            default=_json_default,
            separators=(",", ":"),
            sort_keys=True,
        )
    except (TypeError, ValueError):
        return str(value)


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)
