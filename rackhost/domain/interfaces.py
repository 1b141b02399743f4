"""Typed interfaces for host-side collaborators of the application factory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .models import RackResponse


class HostContextPort(Protocol):
    """Port definition for the host serving environment context."""

    def context_get_init_parameter(self, name: str) -> str | None:
        """Return one deployment init parameter.

        Args:
            name: Init parameter name.

        Returns:
            str | None: Parameter value, or None when absent.

        Raises:
            RuntimeError: Raised when host configuration is unavailable.
        """

    def context_log(self, message: str, error: BaseException | None = None, level: int | None = None) -> None:
        """Write one entry to the host logging sink.

        Args:
            message: Human-readable log message.
            error: Optional error attached to the entry.
            level: Optional stdlib logging level overriding the default for the entry.

        Returns:
            None: Logging has no return value.

        Raises:
            RuntimeError: This port must not raise for logging failures.
        """


class ResponseSinkPort(Protocol):
    """Port definition for an output sink a response renders itself into."""

    def sink_default_respond(self, response: RackResponse) -> None:
        """Write status, headers and body of one response.

        Args:
            response: Response to render.

        Returns:
            None: Rendering happens as a side effect.

        Raises:
            OSError: Raised when the underlying output fails.
        """
