"""Tests for response value objects and default stream rendering."""

from __future__ import annotations

import io
import logging

import pytest

from rackhost.domain import RackResponse, StreamResponseSink, domain_status_line


class _FailingStream(io.BytesIO):
    """Binary stream double failing after the first write."""

    def __init__(self) -> None:
        super().__init__()
        self.write_count = 0

    def write(self, data: bytes) -> int:  # type: ignore[override]
        """Accept the first write and fail afterwards.

        Args:
            data: Bytes to write.

        Returns:
            int: Number of bytes written.

        Raises:
            ConnectionResetError: Raised from the second write onward.
        """

        self.write_count += 1
        if self.write_count > 1:
            raise ConnectionResetError("connection reset by peer")
        return super().write(data)


class _RecordingHostContext:
    """Host context double recording log entries."""

    def __init__(self) -> None:
        self.entries: list[tuple[str, BaseException | None]] = []
        self.levels: list[int | None] = []

    def context_get_init_parameter(self, name: str) -> str | None:
        """Return no parameters.

        Args:
            name: Parameter name.

        Returns:
            str | None: Always None.
        """

        _ = name
        return None

    def context_log(self, message: str, error: BaseException | None = None, level: int | None = None) -> None:
        """Record log entry.

        Args:
            message: Log message.
            error: Optional attached error.
            level: Optional logging level.
        """

        self.entries.append((message, error))
        self.levels.append(level)


def test_domain_stream_sink_renders_status_headers_and_body() -> None:
    """Render an HTTP/1.1 message with computed content length.

    Returns:
        None: Assertions validate rendered bytes.

    Raises:
        AssertionError: Raised when rendering is unexpected.
    """

    stream = io.BytesIO()
    response = RackResponse(status=200, headers={"Content-Type": "text/plain"}, body="hello")

    response.response_respond(StreamResponseSink(stream))

    assert stream.getvalue() == (
        b"HTTP/1.1 200 OK\r\n"
        b"Content-Type: text/plain\r\n"
        b"Content-Length: 5\r\n"
        b"\r\n"
        b"hello"
    )


def test_domain_stream_sink_keeps_explicit_content_length() -> None:
    """Do not add a second content length header.

    Returns:
        None: Assertions validate header handling.

    Raises:
        AssertionError: Raised when the header is duplicated.
    """

    stream = io.BytesIO()
    response = RackResponse(status=204, headers={"content-length": "0"}, body=b"")

    StreamResponseSink(stream).sink_default_respond(response)

    assert stream.getvalue().count(b"ontent-") == 1
    assert stream.getvalue().startswith(b"HTTP/1.1 204 No Content\r\n")


def test_domain_status_line_handles_unknown_status() -> None:
    """Render a generic reason phrase for unregistered status codes.

    Returns:
        None: Assertions validate status line rendering.

    Raises:
        AssertionError: Raised when the status line is unexpected.
    """

    assert domain_status_line(500) == "HTTP/1.1 500 Internal Server Error"
    assert domain_status_line(599) == "HTTP/1.1 599 Unknown"


def test_domain_response_is_read_only() -> None:
    """Reject mutation of response fields and headers.

    Returns:
        None: Assertions validate immutability.

    Raises:
        AssertionError: Raised when mutation succeeds.
    """

    source_headers = {"X-Trace": "1"}
    response = RackResponse(status=200, headers=source_headers, body=b"ok")
    source_headers["X-Trace"] = "2"

    assert response.headers["X-Trace"] == "1"
    with pytest.raises(TypeError):
        response.headers["X-Trace"] = "3"  # type: ignore[index]
    with pytest.raises(AttributeError):
        response.status = 201  # type: ignore[misc]


def test_domain_response_logs_stream_failures_through_host_context() -> None:
    """Log output failures via the host context instead of raising.

    Returns:
        None: Assertions validate failure containment.

    Raises:
        AssertionError: Raised when the error propagates.
    """

    host_context = _RecordingHostContext()
    response = RackResponse(status=200, body=b"partial", context=host_context)

    response.response_respond(StreamResponseSink(_FailingStream()))

    assert len(host_context.entries) == 1
    assert host_context.entries[0][0] == "Error writing body"
    assert isinstance(host_context.entries[0][1], ConnectionResetError)


def test_domain_response_without_context_logs_to_module_logger(caplog: pytest.LogCaptureFixture) -> None:
    """Log output failures to the module logger when no host context is attached.

    Args:
        caplog: Pytest log capture fixture.

    Returns:
        None: Assertions validate fallback logging.

    Raises:
        AssertionError: Raised when nothing is logged.
    """

    response = RackResponse(status=200, body=b"partial")

    with caplog.at_level(logging.ERROR, logger="rackhost.domain.models"):
        response.response_respond(StreamResponseSink(_FailingStream()))

    assert "Error writing body" in caplog.text
