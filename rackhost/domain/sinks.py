"""Default response rendering into binary output streams."""

from __future__ import annotations

from http import HTTPStatus
from typing import BinaryIO

from .interfaces import ResponseSinkPort
from .models import RackResponse


def domain_status_line(status: int) -> str:
    """Build an HTTP/1.1 status line for a status code.

    Args:
        status: HTTP status code.

    Returns:
        str: Status line without trailing line break.
    """

    try:
        reason = HTTPStatus(status).phrase
    except ValueError:
        reason = "Unknown"
    return f"HTTP/1.1 {status} {reason}"


class StreamResponseSink(ResponseSinkPort):
    """Response sink writing an HTTP/1.1 message to a binary stream."""

    def __init__(self, stream: BinaryIO):
        """Initialize stream sink.

        Args:
            stream: Writable binary stream.

        Raises:
            ValueError: Raised when stream is None.
        """

        if stream is None:
            raise ValueError("stream must not be None")
        self._stream = stream

    def sink_default_respond(self, response: RackResponse) -> None:
        """Write status line, headers and body to the stream.

        Args:
            response: Response to render.

        Returns:
            None: Output is written to the stream.

        Raises:
            OSError: Raised when the stream write fails.
        """

        body = response.response_body_bytes()
        header_lines = [domain_status_line(response.status)]
        header_names = {name.lower() for name in response.headers}
        for name, value in response.headers.items():
            header_lines.append(f"{name}: {value}")
        if "content-length" not in header_names:
            header_lines.append(f"Content-Length: {len(body)}")

        self._stream.write(("\r\n".join(header_lines) + "\r\n\r\n").encode("latin-1"))
        self._stream.write(body)
        self._stream.flush()
