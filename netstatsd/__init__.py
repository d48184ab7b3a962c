"""Client library for sending metrics to a statsd daemon over UDP."""

from .client import StatsdClient, make_client
from .sampling import InvalidBatchError
from .transport import UDPTransport


__all__ = [
    "InvalidBatchError",
    "StatsdClient",
    "UDPTransport",
    "make_client",
]
