"""Check that the target database exists and create it when it does not."""

import enum
import logging

from influx_hook.client import TimeSeriesClient
from influx_hook.errors import ProvisioningError

logger = logging.getLogger(__name__)


class DatabaseStatus(enum.Enum):
    """Outcome of a SHOW DATABASES lookup. Only FOUND means the database exists."""

    QUERY_FAILED = "query_failed"
    NO_RESULTS = "no_results"
    NO_SERIES = "no_series"
    NOT_FOUND = "not_found"
    FOUND = "found"


def check_database(client: TimeSeriesClient, database: str) -> DatabaseStatus:
    """Look for *database* in the first series returned by SHOW DATABASES."""
    try:
        results = client.query("SHOW DATABASES", database)
    except Exception as e:
        logger.debug("SHOW DATABASES failed: %s", e)
        return DatabaseStatus.QUERY_FAILED

    if not results:
        return DatabaseStatus.NO_RESULTS
    series = results[0].get("series")
    if not series:
        return DatabaseStatus.NO_SERIES

    for row in series[0].get("values") or []:
        for cell in row:
            # Only string cells can be database names
            if isinstance(cell, str) and cell == database:
                return DatabaseStatus.FOUND
    return DatabaseStatus.NOT_FOUND


def quote_ident(name: str) -> str:
    """Double-quote an InfluxQL identifier, escaping embedded quotes."""
    return '"' + name.replace("\\", "\\\\").replace('"', '\\"') + '"'


def database_exists(client: TimeSeriesClient, database: str) -> bool:
    return check_database(client, database) is DatabaseStatus.FOUND


def autocreate_database(client: TimeSeriesClient, database: str) -> DatabaseStatus:
    """Create *database* unless SHOW DATABASES already lists it.

    Returns the status of the existence check that preceded any create.

    Raises:
        ProvisioningError: If CREATE DATABASE fails.
    """
    status = check_database(client, database)
    if status is DatabaseStatus.FOUND:
        logger.debug("Database %s already exists", database)
        return status

    logger.info("Database %s not available (%s), creating it", database, status.value)
    try:
        client.query(f"CREATE DATABASE {quote_ident(database)}", database)
    except Exception as e:
        raise ProvisioningError(
            f"Could not create database {database} after {status.value}: {e}",
            status=status,
        ) from e
    return status
