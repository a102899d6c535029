"""Port interfaces for the pipeline's external collaborators.

These protocols define the contracts that adapters must implement.
The core depends only on these interfaces, not concrete implementations.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class StatusSourcePort(Protocol):
    """Port for fetching the raw status document.

    Examples: HttpStatusSource.
    """

    async def fetch(self) -> str:
        """Fetch the complete status body.

        Returns:
            The response body as text.

        Raises:
            FetchError: If the endpoint cannot be reached or answers non-2xx.
        """
        ...


@runtime_checkable
class MetricsTransportPort(Protocol):
    """Port for fire-and-forget delivery of encoded metric payloads.

    Examples: UDPTransport, InMemoryTransport.
    """

    async def send(self, payload: bytes) -> None:
        """Send one payload as a single datagram.

        Raises:
            SendError: If the write fails.
        """
        ...


@runtime_checkable
class DiagnosticSinkPort(Protocol):
    """Port for the local sink that receives payloads in debug mode.

    Examples: StreamSink.
    """

    def write(self, payload: str) -> None:
        """Write one payload."""
        ...
