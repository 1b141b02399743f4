"""Project-native typed exceptions for application factory failures."""

from __future__ import annotations


class RackHostError(Exception):
    """Base exception for application factory and lifecycle failures."""


class RuntimeInitializationError(RackHostError, RuntimeError):
    """Embedded runtime could not be bootstrapped (adapter load or environment failure)."""


class RackInitializationError(RackHostError, RuntimeError):
    """Application object construction or binding failed.

    The message is the causing error's message so that fallback responses can
    surface it verbatim; the cause itself is chained via ``raise ... from``.
    """

    @classmethod
    def from_error(cls, error: BaseException) -> "RackInitializationError":
        """Build an initialization error carrying the causing error's message.

        Args:
            error: Causing runtime or bootstrap error.

        Returns:
            RackInitializationError: Error instance with matching message.
        """

        return cls(str(error))


class UnsupportedOperationError(RackHostError, NotImplementedError):
    """Operation is not available on this application variant."""


class ApplicationStateError(RackHostError, RuntimeError):
    """Application lifecycle operation was invoked in an invalid state."""
