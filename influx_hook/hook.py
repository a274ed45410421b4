"""InfluxDB hook: turns log events into points and writes them one at a time."""

import logging
import os
import threading
from types import MappingProxyType
from typing import Mapping

from werkzeug.wrappers import Request

from influx_hook.client import InfluxClient, TimeSeriesClient
from influx_hook.config import Config
from influx_hook.levels import ALL_LEVELS, Level
from influx_hook.models import MEASUREMENT, PRECISION, LogEvent, Point, utc_now
from influx_hook.provisioning import autocreate_database

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8086
DEFAULT_DATABASE = "logrus"
DEFAULT_TIMEOUT = 0.1  # seconds
DEFAULT_RETENTION_POLICY = "default"

USER_ENV = "INFLUX_USER"
PASSWORD_ENV = "INFLUX_PWD"


class InfluxDBHook:
    """Delivers log events to an InfluxDB database.

    The client is shared, not owned: closing it is the caller's business.
    Default tags are copied at construction and never mutated afterwards, so
    ``fire`` may be called from several threads at once.
    """

    def __init__(
        self,
        client: TimeSeriesClient,
        database: str = "",
        tags: Mapping[str, str] | None = None,
        retention_policy: str = DEFAULT_RETENTION_POLICY,
    ):
        self._client = client
        self._database = database or DEFAULT_DATABASE
        self._tags = MappingProxyType(dict(tags or {}))
        self._retention_policy = retention_policy
        self._lock = threading.Lock()
        self._sent = 0
        self._failed = 0

    @classmethod
    def connect(
        cls,
        host: str,
        database: str = "",
        tags: Mapping[str, str] | None = None,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
        username: str | None = None,
        password: str | None = None,
        retention_policy: str = DEFAULT_RETENTION_POLICY,
    ) -> "InfluxDBHook":
        """Connect to ``host:port``, make sure the database exists, return a hook.

        Credentials fall back to the INFLUX_USER / INFLUX_PWD environment
        variables; when those are unset the connection is anonymous.

        Raises:
            DatabaseConnectionError: Bad URL, client setup failure or failed ping.
            ProvisioningError: The database was missing and could not be created.
        """
        database = database or DEFAULT_DATABASE
        if username is None:
            username = os.environ.get(USER_ENV, "")
        if password is None:
            password = os.environ.get(PASSWORD_ENV, "")

        url = f"http://{host}:{port}"
        client = InfluxClient.from_url(url, username, password, timeout)
        client.ping()

        hook = cls(client, database, tags, retention_policy)
        autocreate_database(client, hook.database)
        logger.info("InfluxDB hook ready: %s database=%s", url, hook.database)
        return hook

    @classmethod
    def with_client(
        cls,
        client: TimeSeriesClient | None,
        database: str = "",
        tags: Mapping[str, str] | None = None,
    ) -> "InfluxDBHook":
        """Wrap an existing client. The database is assumed to exist already.

        With no client, falls back to ``connect`` against the default host.
        """
        if client is None:
            return cls.connect(DEFAULT_HOST, database, tags)
        return cls(client, database, tags)

    @classmethod
    def from_config(cls, config: Config) -> "InfluxDBHook":
        return cls.connect(
            config.host,
            database=config.database,
            tags=config.tags,
            port=config.port,
            timeout=config.timeout,
            username=config.username,
            password=config.password,
            retention_policy=config.retention_policy,
        )

    @property
    def client(self) -> TimeSeriesClient:
        return self._client

    @property
    def database(self) -> str:
        return self._database

    @property
    def tags(self) -> Mapping[str, str]:
        return self._tags

    @property
    def retention_policy(self) -> str:
        return self._retention_policy

    @property
    def sent(self) -> int:
        with self._lock:
            return self._sent

    @property
    def failed(self) -> int:
        with self._lock:
            return self._failed

    def levels(self) -> tuple[Level, ...]:
        return ALL_LEVELS

    def accepts(self, level: Level) -> bool:
        return level in self.levels()

    def build_point(self, event: LogEvent) -> Point:
        """Map one event onto one point. Defaults are copied, never modified."""
        tags = dict(self._tags)
        tags["level"] = str(event.level)

        data = event.fields
        logger_name = data.get("logger")
        if isinstance(logger_name, str):
            tags["logger"] = logger_name
        server_name = data.get("server_name")
        if isinstance(server_name, str):
            tags["server_name"] = server_name

        fields = {"message": event.message}
        req = data.get("http_request")
        if isinstance(req, Request):
            fields["http_request"] = req
        fields["extras"] = dict(data)

        return Point(
            measurement=MEASUREMENT,
            tags=tags,
            fields=fields,
            time=utc_now(),
            precision=PRECISION,
        )

    def fire(self, event: LogEvent) -> None:
        """Write *event* as a single point. Write errors propagate unchanged."""
        point = self.build_point(event)
        try:
            self._client.write(
                [point.to_dict()],
                self._database,
                self._retention_policy,
                point.precision,
            )
        except Exception:
            with self._lock:
                self._failed += 1
            raise
        with self._lock:
            self._sent += 1
