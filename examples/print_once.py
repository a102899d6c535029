"""Fetch a Pi-hole status once and print the StatsD lines it would produce.

Run with:
    python examples/print_once.py 192.168.1.28
"""

import asyncio
import sys

from pihole_statsd.adapters.http import HttpStatusSource
from pihole_statsd.adapters.sinks import StreamSink
from pihole_statsd.core.dispatch import Dispatcher
from pihole_statsd.core.pipeline import StatsPipeline
from pihole_statsd.logging_setup import configure_logging


async def main(api_host: str) -> None:
    source = HttpStatusSource(api_host)
    pipeline = StatsPipeline(source, Dispatcher(None, StreamSink(), debug=True))
    try:
        await pipeline.run_once()
    finally:
        await source.close()


if __name__ == "__main__":
    configure_logging("DEBUG")
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "pi.hole"))
