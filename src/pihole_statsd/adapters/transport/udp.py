"""Fire-and-forget UDP transport built on asyncio datagram endpoints."""

import asyncio
import logging

from pihole_statsd.core.errors import SendError

logger = logging.getLogger(__name__)

DEFAULT_STATSD_PORT = 8125


class _StatsdProtocol(asyncio.DatagramProtocol):
    """Logs asynchronous socket errors; nothing is ever received."""

    def __init__(self, address: tuple[str, int]) -> None:
        self._address = address

    def error_received(self, exc: Exception) -> None:
        host, port = self._address
        logger.error("UDP error sending to %s:%d: %s", host, port, exc)


class UDPTransport:
    """MetricsTransportPort implementation sending one datagram per payload.

    The endpoint is opened once and shared by every tick. Opening happens
    on first send if open() was not called.
    """

    def __init__(self, host: str, port: int = DEFAULT_STATSD_PORT) -> None:
        self.host = host
        self.port = port
        self._transport: asyncio.DatagramTransport | None = None
        self._open_lock: asyncio.Lock | None = None

    def _get_lock(self) -> asyncio.Lock:
        """Get or create the open lock (lazy to avoid event loop issues)."""
        if self._open_lock is None:
            self._open_lock = asyncio.Lock()
        return self._open_lock

    @property
    def is_open(self) -> bool:
        return self._transport is not None and not self._transport.is_closing()

    async def open(self) -> None:
        """Resolve the aggregator address and create the datagram endpoint.

        Raises:
            SendError: If the address cannot be resolved or bound.
        """
        if self.is_open:
            return
        async with self._get_lock():
            if self.is_open:
                return
            loop = asyncio.get_running_loop()
            address = (self.host, self.port)
            try:
                transport, _ = await loop.create_datagram_endpoint(
                    lambda: _StatsdProtocol(address), remote_addr=address
                )
            except OSError as exc:
                raise SendError(
                    f"Cannot open UDP endpoint {self.host}:{self.port}: {exc}"
                ) from exc
            self._transport = transport
            logger.info("UDP transport ready for %s:%d", self.host, self.port)

    async def send(self, payload: bytes) -> None:
        """Send payload as a single datagram.

        Raises:
            SendError: If the endpoint cannot be opened or the write fails.
        """
        await self.open()
        assert self._transport is not None
        try:
            self._transport.sendto(payload)
        except OSError as exc:
            raise SendError(
                f"Failed to send {len(payload)} bytes to {self.host}:{self.port}: {exc}"
            ) from exc

    async def close(self) -> None:
        """Close the datagram endpoint."""
        if self._transport is not None:
            self._transport.close()
            self._transport = None
