"""Transport adapters for encoded metric payloads."""

from pihole_statsd.adapters.transport.in_memory import InMemoryTransport
from pihole_statsd.adapters.transport.udp import UDPTransport

__all__ = ["InMemoryTransport", "UDPTransport"]
