"""Domain models used across application layer boundaries."""

from .errors import (
    ApplicationStateError,
    RackHostError,
    RackInitializationError,
    RuntimeInitializationError,
    UnsupportedOperationError,
)
from .interfaces import HostContextPort, ResponseSinkPort
from .models import RackEnvironment, RackResponse
from .sinks import StreamResponseSink, domain_status_line

__all__ = [
    "ApplicationStateError",
    "HostContextPort",
    "RackEnvironment",
    "RackHostError",
    "RackInitializationError",
    "RackResponse",
    "ResponseSinkPort",
    "RuntimeInitializationError",
    "StreamResponseSink",
    "UnsupportedOperationError",
    "domain_status_line",
]
