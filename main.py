"""Entry point: ship a log file (or stdin) to InfluxDB through the hook."""

import logging
import sys

from influx_hook.config import load_config
from influx_hook.errors import HookError
from influx_hook.formatter import parse_log_line
from influx_hook.hook import InfluxDBHook

logger = logging.getLogger("main")


def ship_lines(hook: InfluxDBHook, lines) -> None:
    """Fire every parseable line; failures are logged and counted, not fatal."""
    for line in lines:
        event = parse_log_line(line)
        if event is None:
            logger.debug("Skipping unparseable line: %s", line[:100])
            continue
        event.fields["logger"] = "main"
        try:
            hook.fire(event)
        except HookError as e:
            logger.warning("Failed to deliver log line: %s", e)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(argv)
    except (ValueError, OSError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    logger.info("Starting InfluxDB shipper — server=%s:%d, database=%s, file=%s",
                config.host, config.port, config.database, config.log_file or "<stdin>")

    try:
        hook = InfluxDBHook.from_config(config)
    except HookError as e:
        logger.error("Could not set up InfluxDB hook: %s", e)
        return 1

    if config.log_file:
        with open(config.log_file, "r", encoding="utf-8") as f:
            ship_lines(hook, f)
    else:
        ship_lines(hook, sys.stdin)

    logger.info("Shipper finished: sent=%d, failed=%d", hook.sent, hook.failed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
