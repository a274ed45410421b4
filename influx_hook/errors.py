"""Exception types raised by the hook."""


class HookError(Exception):
    """Base class for every error raised by influx_hook."""


class DatabaseConnectionError(HookError, ConnectionError):
    """The database could not be reached: bad URL, client setup or ping failure."""


class ProvisioningError(HookError):
    """The target database was missing and could not be created."""

    def __init__(self, message: str, status=None):
        super().__init__(message)
        self.status = status


class WriteError(HookError):
    """Writing a point to the database failed."""
