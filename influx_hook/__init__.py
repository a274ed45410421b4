"""Forward Python log records to InfluxDB as time-series points.

Attach an ``InfluxDBHandler`` to a logger. Flask apps can pass
``influx_hook.flask_ext.request_fields()`` as ``extra=`` to record the
active request. It is not imported here, so importing influx_hook does not
load Flask.
"""

from influx_hook.errors import (
    DatabaseConnectionError,
    HookError,
    ProvisioningError,
    WriteError,
)
from influx_hook.handler import InfluxDBHandler
from influx_hook.hook import InfluxDBHook
from influx_hook.levels import ALL_LEVELS, Level
from influx_hook.models import LogEvent, Point

__all__ = [
    "ALL_LEVELS",
    "DatabaseConnectionError",
    "HookError",
    "InfluxDBHandler",
    "InfluxDBHook",
    "Level",
    "LogEvent",
    "Point",
    "ProvisioningError",
    "WriteError",
]
