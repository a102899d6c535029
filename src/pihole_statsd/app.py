"""Wiring of configuration, adapters, pipeline and scheduler."""

import logging
from dataclasses import dataclass

from pihole_statsd.adapters.http import HttpStatusSource
from pihole_statsd.adapters.sinks import StreamSink
from pihole_statsd.adapters.transport.udp import UDPTransport
from pihole_statsd.config import PiholeStatsdConfig
from pihole_statsd.core.dispatch import Dispatcher
from pihole_statsd.core.errors import SendError
from pihole_statsd.core.pipeline import StatsPipeline
from pihole_statsd.core.ports import (
    DiagnosticSinkPort,
    MetricsTransportPort,
    StatusSourcePort,
)
from pihole_statsd.runtime.scheduler import PollScheduler

logger = logging.getLogger(__name__)


@dataclass
class Exporter:
    """A fully wired exporter: the pipeline and the scheduler driving it."""

    config: PiholeStatsdConfig
    source: StatusSourcePort
    transport: MetricsTransportPort | None
    pipeline: StatsPipeline
    scheduler: PollScheduler


def create_exporter(
    config: PiholeStatsdConfig,
    source: StatusSourcePort | None = None,
    transport: MetricsTransportPort | None = None,
    sink: DiagnosticSinkPort | None = None,
) -> Exporter:
    """Create an exporter from configuration.

    Adapters default to the httpx status source, the UDP transport and a
    stdout sink; pass fakes to replace them.

    Args:
        config: Static configuration.
        source: Status source (default: HttpStatusSource on config.api_host).
        transport: Metrics transport (default: UDPTransport, unused in debug).
        sink: Diagnostic sink for debug mode (default: StreamSink on stdout).

    Returns:
        Exporter whose scheduler has not been started.
    """
    if source is None:
        source = HttpStatusSource(config.api_host)
    if transport is None and not config.debug:
        transport = UDPTransport(config.metrics_host, config.metrics_port)
    if sink is None and config.debug:
        sink = StreamSink()

    dispatcher = Dispatcher(transport, sink, debug=config.debug)
    pipeline = StatsPipeline(source, dispatcher, tag_prefix=config.tag_prefix)
    scheduler = PollScheduler(pipeline, interval_seconds=config.poll_interval_seconds)
    return Exporter(
        config=config,
        source=source,
        transport=transport,
        pipeline=pipeline,
        scheduler=scheduler,
    )


async def run(exporter: Exporter) -> None:
    """Open the transport once, then poll until cancelled."""
    if isinstance(exporter.transport, UDPTransport):
        try:
            await exporter.transport.open()
        except SendError as exc:
            logger.warning("%s; will retry on first send", exc)

    logger.info(
        "Polling %s every %d ms (%s)",
        exporter.config.api_host,
        exporter.config.poll_interval_ms,
        "debug, no network send"
        if exporter.config.debug
        else f"sending to {exporter.config.metrics_host}:{exporter.config.metrics_port}",
    )
    try:
        await exporter.scheduler.run_forever()
    finally:
        if isinstance(exporter.transport, UDPTransport):
            await exporter.transport.close()
        if isinstance(exporter.source, HttpStatusSource):
            await exporter.source.close()
