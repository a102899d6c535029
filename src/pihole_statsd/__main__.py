"""Process entry point: ``python -m pihole_statsd`` or ``pihole-statsd``."""

import asyncio
import logging
import sys

from pihole_statsd.app import create_exporter, run
from pihole_statsd.config import PiholeStatsdConfig
from pihole_statsd.core.errors import ConfigError
from pihole_statsd.logging_setup import configure_logging

logger = logging.getLogger("pihole_statsd")


def main() -> int:
    try:
        config = PiholeStatsdConfig.from_env()
    except ConfigError as exc:
        configure_logging()
        logger.error("Invalid configuration: %s", exc)
        return 2

    configure_logging(config.log_level)
    exporter = create_exporter(config)
    try:
        asyncio.run(run(exporter))
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())
