"""Dispatcher that hands encoded lines to the transport or a debug sink."""

import logging
from collections.abc import Sequence

from pihole_statsd.core.errors import SendError
from pihole_statsd.core.ports import DiagnosticSinkPort, MetricsTransportPort

logger = logging.getLogger(__name__)


class Dispatcher:
    """Joins metric lines into one payload and delivers it.

    In debug mode the payload goes to the diagnostic sink and the transport
    is never used. Send failures are logged, never raised.
    """

    def __init__(
        self,
        transport: MetricsTransportPort | None,
        sink: DiagnosticSinkPort | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            transport: Network transport, required unless ``debug`` is set.
            sink: Diagnostic sink, required when ``debug`` is set.
            debug: True to write payloads to ``sink`` instead of the network.
        """
        if debug and sink is None:
            raise ValueError("debug mode requires a diagnostic sink")
        if not debug and transport is None:
            raise ValueError("a transport is required outside debug mode")
        self._transport = transport
        self._sink = sink
        self._debug = debug

    @property
    def debug(self) -> bool:
        return self._debug

    async def dispatch(self, lines: Sequence[str]) -> None:
        """Deliver lines as a single newline-joined payload.

        Args:
            lines: Encoded metric lines. Nothing is sent if empty.
        """
        if not lines:
            logger.debug("No metric lines to dispatch")
            return

        payload = "\n".join(lines)
        if self._debug:
            assert self._sink is not None
            self._sink.write(payload)
            return

        assert self._transport is not None
        try:
            await self._transport.send(payload.encode("utf-8"))
        except SendError:
            logger.exception("Failed to send %d metric lines", len(lines))
            return
        logger.debug("Sent %d metric lines (%d bytes)", len(lines), len(payload))
