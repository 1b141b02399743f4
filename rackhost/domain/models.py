"""Typed request and response value objects shared across runtime layers."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from types import MappingProxyType
from typing import Mapping

from .interfaces import HostContextPort, ResponseSinkPort

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RackEnvironment:
    """Host-neutral request handed to an application call.

    Attributes:
        method: HTTP request method in upper case.
        path: Request path.
        query_string: Raw query string without leading `?`.
        headers: Request headers keyed by lower-case header name.
        body: Raw request body bytes.
        scheme: URL scheme used by the client.
        server_name: Host name the request was addressed to.
        server_port: Port the request was addressed to.
        exception: Error raised by the primary application, set when the host
            re-dispatches the request to the error application.
    """

    method: str = "GET"
    path: str = "/"
    query_string: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    scheme: str = "http"
    server_name: str = "localhost"
    server_port: int = 80
    exception: BaseException | None = None


@dataclass(frozen=True)
class RackResponse:
    """Read-only response produced by an application call.

    Attributes:
        status: HTTP status code.
        headers: Read-only header mapping with unique keys.
        body: Text or byte payload.
        context: Optional host context used to log render failures.
    """

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str | bytes = b""
    context: HostContextPort | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def response_body_bytes(self) -> bytes:
        """Return the body encoded as bytes.

        Returns:
            bytes: Body bytes; text bodies are UTF-8 encoded.
        """

        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return bytes(self.body)

    def response_respond(self, sink: ResponseSinkPort) -> None:
        """Render this response into the given output sink.

        Output failures are logged through the host context and never
        propagated: part of the response may already have been written.

        Args:
            sink: Output sink receiving status, headers and body.

        Returns:
            None: Rendering happens as a side effect.
        """

        try:
            sink.sink_default_respond(self)
        except OSError as error:
            if self.context is not None:
                self.context.context_log("Error writing body", error)
            else:
                _LOGGER.error("Error writing body", exc_info=error)
