"""Response sink collecting a rendered response into a Starlette response."""

from __future__ import annotations

from fastapi import Response

from rackhost.domain import RackResponse, ResponseSinkPort


class StarletteResponseSink(ResponseSinkPort):
    """Response sink buffering status, headers and body for the HTTP framework."""

    def __init__(self) -> None:
        self._status_code = 500
        self._headers: dict[str, str] = {}
        self._body = b""
        self._responded = False

    def sink_default_respond(self, response: RackResponse) -> None:
        """Capture status, headers and body of one response.

        Args:
            response: Response to render.

        Returns:
            None: Values are buffered for `sink_to_response`.
        """

        self._status_code = response.status
        self._headers = {
            name: value for name, value in response.headers.items() if name.lower() != "content-length"
        }
        self._body = response.response_body_bytes()
        self._responded = True

    def sink_has_responded(self) -> bool:
        """Return whether a response was captured.

        Returns:
            bool: True after a successful `sink_default_respond`.
        """

        return self._responded

    def sink_to_response(self) -> Response:
        """Build the framework response from captured values.

        Returns:
            Response: Framework response.
        """

        return Response(content=self._body, status_code=self._status_code, headers=self._headers)
