"""Narrow client interface over the InfluxDB HTTP API."""

import logging
from typing import Protocol
from urllib.parse import urlsplit

import requests
from influxdb import InfluxDBClient
from influxdb.exceptions import InfluxDBClientError, InfluxDBServerError

from influx_hook.errors import DatabaseConnectionError, WriteError

logger = logging.getLogger(__name__)

_CLIENT_ERRORS = (InfluxDBClientError, InfluxDBServerError, requests.RequestException)

# Statements InfluxDB accepts over GET; everything else must be POSTed.
_READ_ONLY_PREFIXES = ("SELECT", "SHOW")


class TimeSeriesClient(Protocol):
    """What the hook needs from a database client: ping, query and write."""

    def ping(self) -> None: ...

    def query(self, command: str, database: str) -> list[dict]: ...

    def write(
        self,
        points: list[dict],
        database: str,
        retention_policy: str,
        precision: str,
    ) -> None: ...


class InfluxClient:
    """TimeSeriesClient backed by the influxdb package."""

    def __init__(self, client: InfluxDBClient):
        self._client = client

    @classmethod
    def from_url(
        cls,
        url: str,
        username: str = "",
        password: str = "",
        timeout: float | None = None,
    ) -> "InfluxClient":
        """Build a client for ``http(s)://host:port``.

        Raises:
            DatabaseConnectionError: If the URL is malformed or the client
                cannot be constructed.
        """
        try:
            parts = urlsplit(url)
            host = parts.hostname
            port = parts.port
        except ValueError as e:
            raise DatabaseConnectionError(f"Invalid InfluxDB URL {url!r}: {e}") from e
        if parts.scheme not in ("http", "https") or not host:
            raise DatabaseConnectionError(f"Invalid InfluxDB URL {url!r}")

        try:
            client = InfluxDBClient(
                host=host,
                port=port or 8086,
                username=username,
                password=password,
                ssl=parts.scheme == "https",
                timeout=timeout,
            )
        except (TypeError, ValueError, *_CLIENT_ERRORS) as e:
            raise DatabaseConnectionError(f"Could not create InfluxDB client for {url}: {e}") from e

        logger.debug("InfluxDB client created for %s", url)
        return cls(client)

    @property
    def raw(self) -> InfluxDBClient:
        return self._client

    def ping(self) -> None:
        """Liveness probe. Raises DatabaseConnectionError when the server is unreachable."""
        try:
            version = self._client.ping()
        except _CLIENT_ERRORS as e:
            raise DatabaseConnectionError(f"InfluxDB ping failed: {e}") from e
        logger.info("Connected to InfluxDB version %s", version)

    def query(self, command: str, database: str) -> list[dict]:
        """Run a single InfluxQL statement and return the raw result dicts."""
        method = "GET" if command.lstrip().upper().startswith(_READ_ONLY_PREFIXES) else "POST"
        result = self._client.query(command, database=database, method=method)
        if not isinstance(result, list):
            result = [result]
        return [rs.raw for rs in result]

    def write(
        self,
        points: list[dict],
        database: str,
        retention_policy: str,
        precision: str,
    ) -> None:
        """Write points in one request. Raises WriteError on failure."""
        try:
            self._client.write_points(
                points,
                time_precision=precision,
                database=database,
                retention_policy=retention_policy,
            )
        except _CLIENT_ERRORS as e:
            raise WriteError(f"Write to {database}.{retention_policy} failed: {e}") from e
