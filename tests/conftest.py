import pytest

from influx_hook.hook import InfluxDBHook


class FakeClient:
    """In-memory TimeSeriesClient that records every call."""

    def __init__(self, databases=None, show_results=None, query_error=None,
                 create_error=None, write_error=None, ping_error=None):
        self.databases = list(databases or [])
        self.show_results = show_results
        self.query_error = query_error
        self.create_error = create_error
        self.write_error = write_error
        self.ping_error = ping_error
        self.pings = 0
        self.queries: list[tuple[str, str]] = []
        self.writes: list[dict] = []

    @property
    def create_statements(self) -> list[str]:
        return [cmd for cmd, _ in self.queries if cmd.upper().startswith("CREATE")]

    def ping(self):
        self.pings += 1
        if self.ping_error:
            raise self.ping_error

    def query(self, command, database):
        self.queries.append((command, database))
        if command.upper().startswith("CREATE"):
            if self.create_error:
                raise self.create_error
            self.databases.append(command.split(None, 2)[-1].strip('"'))
            return [{"statement_id": 0}]
        if self.query_error:
            raise self.query_error
        if self.show_results is not None:
            return self.show_results
        return [{
            "statement_id": 0,
            "series": [{
                "name": "databases",
                "columns": ["name"],
                "values": [[name] for name in self.databases],
            }],
        }]

    def write(self, points, database, retention_policy, precision):
        if self.write_error:
            raise self.write_error
        self.writes.append({
            "points": points,
            "database": database,
            "retention_policy": retention_policy,
            "precision": precision,
        })


@pytest.fixture
def fake_client():
    return FakeClient(databases=["_internal", "logrus"])


@pytest.fixture
def hook(fake_client):
    return InfluxDBHook.with_client(fake_client, "", {"app": "billing"})
