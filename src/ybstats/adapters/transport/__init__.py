"""Transport adapters implementing TransportPort."""

from ybstats.adapters.transport.http import HttpTransport
from ybstats.adapters.transport.in_memory import InMemoryTransport

__all__ = ["HttpTransport", "InMemoryTransport"]
