"""Typed interfaces for embedded scripting runtimes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Protocol

from .code_cache import CompiledCodeCache


@dataclass(frozen=True)
class RuntimeConfig:
    """Configuration handed to a runtime provider for one new runtime.

    Attributes:
        code_cache: Compiled-code cache shared by every runtime of one factory.
        load_paths: Extra directories searched before bundled script resources.
    """

    code_cache: CompiledCodeCache
    load_paths: tuple[Path, ...] = field(default_factory=tuple)


class EmbeddedRuntimePort(Protocol):
    """Port definition for one isolated embedded scripting runtime."""

    def runtime_evaluate(self, script: str, filename: str = "<script>") -> Any:
        """Evaluate a script fragment and return its trailing expression value.

        Args:
            script: Script source text.
            filename: Filename reported in tracebacks.

        Returns:
            Any: Value of the trailing expression statement, or None.

        Raises:
            ScriptRaiseError: Raised when script code raises.
            RuntimeTerminatedError: Raised when the runtime was terminated.
        """

    def runtime_bind_global(self, name: str, value: Any) -> None:
        """Bind a named value into the runtime global namespace.

        Args:
            name: Global variable name.
            value: Value to publish.

        Returns:
            None: Binding has no return value.

        Raises:
            RuntimeTerminatedError: Raised when the runtime was terminated.
        """

    def runtime_terminate(self) -> None:
        """Tear down the runtime and release its resources.

        Returns:
            None: Teardown has no return value.

        Raises:
            RuntimeError: Implementations must not raise for repeated calls.
        """

    def runtime_is_terminated(self) -> bool:
        """Return whether the runtime has been terminated.

        Returns:
            bool: True after `runtime_terminate` has completed.
        """


RuntimeProvider = Callable[[RuntimeConfig], EmbeddedRuntimePort]
