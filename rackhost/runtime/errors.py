"""Typed exceptions raised across the embedded runtime boundary."""

from __future__ import annotations


class ScriptRaiseError(RuntimeError):
    """Script code raised an error while being evaluated inside a runtime.

    Attributes:
        filename: Script filename reported by the failing evaluation.
    """

    def __init__(self, message: str, filename: str | None = None):
        super().__init__(message)
        self.filename = filename


class ScriptLoadError(ImportError):
    """Script feature could not be resolved on the runtime load path."""


class RuntimeTerminatedError(RuntimeError):
    """Runtime was used after it had been terminated."""
