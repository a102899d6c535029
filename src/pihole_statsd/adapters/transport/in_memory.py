"""In-memory transport adapter."""

from pihole_statsd.core.errors import SendError


class InMemoryTransport:
    """In-memory implementation of MetricsTransportPort.

    Stores sent payloads in a list. Suitable for testing and dry runs
    where no aggregator is reachable. Set ``fail_with`` to make every send
    raise SendError.
    """

    def __init__(self) -> None:
        self._payloads: list[bytes] = []
        self.fail_with: str | None = None

    async def send(self, payload: bytes) -> None:
        """Record a payload, or fail if ``fail_with`` is set."""
        if self.fail_with is not None:
            raise SendError(self.fail_with)
        self._payloads.append(payload)

    @property
    def payloads(self) -> list[bytes]:
        """Payloads sent so far, oldest first."""
        return list(self._payloads)

    def lines(self) -> list[str]:
        """All sent metric lines, flattened across payloads."""
        return [
            line for payload in self._payloads for line in payload.decode().split("\n")
        ]
