"""Tests for the logging handler."""

import logging

import pytest

from influx_hook.errors import WriteError
from influx_hook.handler import InfluxDBHandler, record_to_event
from influx_hook.hook import InfluxDBHook
from influx_hook.levels import PANIC_LEVELNO, Level
from tests.conftest import FakeClient


@pytest.fixture
def app_logger(hook):
    log = logging.getLogger("tests.handler.app")
    log.setLevel(logging.DEBUG)
    log.propagate = False
    handler = InfluxDBHandler(hook)
    log.addHandler(handler)
    yield log
    log.removeHandler(handler)


def _record(level=logging.INFO, msg="hello %s", args=("world",), **extra):
    record = logging.LogRecord("tests.handler", level, __file__, 10, msg, args, None)
    record.__dict__.update(extra)
    return record


class TestRecordToEvent:
    def test_message_and_level(self):
        event = record_to_event(_record(logging.WARNING))
        assert event.level is Level.WARN
        assert event.message == "hello world"

    def test_extra_attributes_become_fields(self):
        event = record_to_event(_record(logger="diskmon", server_name="db1", disk="/dev/sda"))
        assert event.fields == {"logger": "diskmon", "server_name": "db1", "disk": "/dev/sda"}

    def test_no_extras(self):
        assert record_to_event(_record()).fields == {}

    def test_panic_level_name_registered(self):
        assert logging.getLevelName(PANIC_LEVELNO) == "PANIC"
        assert record_to_event(_record(PANIC_LEVELNO)).level is Level.PANIC


class TestEmit:
    def test_fires_point(self, app_logger, fake_client):
        app_logger.warning("disk low", extra={"logger": "diskmon", "server_name": "db1"})
        assert len(fake_client.writes) == 1
        tags = fake_client.writes[0]["points"][0]["tags"]
        assert tags["level"] == "warn"
        assert tags["logger"] == "diskmon"
        assert tags["server_name"] == "db1"

    def test_every_level_delivered(self, app_logger, fake_client):
        app_logger.debug("d")
        app_logger.info("i")
        app_logger.error("e")
        app_logger.critical("c")
        app_logger.log(PANIC_LEVELNO, "p")
        levels = [w["points"][0]["tags"]["level"] for w in fake_client.writes]
        assert levels == ["debug", "info", "error", "fatal", "panic"]

    def test_own_loggers_ignored(self, hook, fake_client):
        handler = InfluxDBHandler(hook)
        record = logging.LogRecord("influx_hook.hook", logging.INFO, __file__, 1, "ready", (), None)
        handler.handle(record)
        assert fake_client.writes == []

    def test_write_failure_goes_to_handle_error(self, monkeypatch):
        hook = InfluxDBHook.with_client(FakeClient(write_error=WriteError("rejected")))
        handler = InfluxDBHandler(hook)
        failed = []
        monkeypatch.setattr(handler, "handleError", failed.append)
        record = _record()
        handler.handle(record)
        assert failed == [record]
        assert hook.failed == 1
