"""Tests for formatter module."""

from influx_hook.formatter import parse_log_line
from influx_hook.levels import Level


class TestParseLogLine:
    def test_info_line(self):
        event = parse_log_line("2024-01-15 08:23:45 INFO Application started successfully")
        assert event.level is Level.INFO
        assert event.message == "Application started successfully"
        assert event.fields == {"timestamp": "2024-01-15 08:23:45"}

    def test_warning_alias(self):
        event = parse_log_line("2024-01-15 08:24:01 WARNING High memory usage detected: 85%")
        assert event.level is Level.WARN
        assert "85%" in event.message

    def test_critical_alias(self):
        assert parse_log_line("2024-01-15 08:30:00 CRITICAL shutdown").level is Level.FATAL

    def test_lowercase_level(self):
        assert parse_log_line("2024-01-15 08:23:45 debug cache hit").level is Level.DEBUG

    def test_unknown_level(self):
        assert parse_log_line("2024-01-15 08:23:45 TRACE too chatty") is None

    def test_empty_line(self):
        assert parse_log_line("") is None
        assert parse_log_line("   \t  ") is None

    def test_missing_message(self):
        assert parse_log_line("2024-01-15 08:23:45 INFO") is None

    def test_garbage_line(self):
        assert parse_log_line("not a valid log line at all") is None

    def test_message_with_colons(self):
        event = parse_log_line("2024-01-15 08:23:45 ERROR Error: connection: refused")
        assert event.message == "Error: connection: refused"
