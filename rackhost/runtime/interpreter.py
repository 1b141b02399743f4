"""Embedded script runtime backed by isolated Python namespaces.

Each `ScriptRuntime` owns its own global namespace, loaded-feature registry
and exit hooks. Script fragments are compiled through the shared
`CompiledCodeCache` and executed against that namespace. Scripts see the
builtins `require`, `load`, `at_exit` and `eval_script` in addition to the
regular Python builtins.
"""

from __future__ import annotations

from importlib import resources
import logging
from pathlib import Path
from typing import Any, Callable

from .code_cache import CompiledCodeCache
from .errors import RuntimeTerminatedError, ScriptLoadError, ScriptRaiseError
from .interfaces import EmbeddedRuntimePort, RuntimeConfig

_LOGGER = logging.getLogger(__name__)

RUNTIME_MODULE_NAME = "__rack_runtime__"
SCRIPT_SUFFIX = ".py"


def runtime_normalize_feature(feature: str) -> str:
    """Normalize a feature name to a slash-separated path without suffix.

    Args:
        feature: Feature name such as `rack/boot/rack` or `rack/boot/rack.py`.

    Returns:
        str: Normalized feature name.

    Raises:
        ValueError: Raised when feature is blank.
    """

    normalized_feature = feature.strip().replace("\\", "/").strip("/")
    if normalized_feature.endswith(SCRIPT_SUFFIX):
        normalized_feature = normalized_feature[: -len(SCRIPT_SUFFIX)]
    if not normalized_feature:
        raise ValueError("feature must not be blank")
    return normalized_feature


class ScriptRuntime(EmbeddedRuntimePort):
    """One isolated scripting runtime."""

    def __init__(self, config: RuntimeConfig):
        """Initialize runtime namespace and script builtins.

        Args:
            config: Runtime configuration with shared code cache and load paths.

        Raises:
            ValueError: Raised when config or its code cache is None.
        """

        if config is None:
            raise ValueError("config must not be None")
        if config.code_cache is None:
            raise ValueError("config.code_cache must not be None")

        self._code_cache: CompiledCodeCache = config.code_cache
        self._load_paths = tuple(Path(load_path) for load_path in config.load_paths)
        self._loaded_features: set[str] = set()
        self._exit_hooks: list[Callable[[], Any]] = []
        self._terminated = False
        self._globals: dict[str, Any] = {}
        self._runtime_reset_globals()

    def runtime_evaluate(self, script: str, filename: str = "<script>") -> Any:
        """Evaluate a script fragment in the runtime global namespace.

        Args:
            script: Script source text.
            filename: Filename reported in tracebacks.

        Returns:
            Any: Value of the trailing expression statement, or None.

        Raises:
            ScriptRaiseError: Raised when script code raises or exits.
            RuntimeTerminatedError: Raised when the runtime was terminated.
        """

        self._runtime_ensure_active()
        try:
            return self._runtime_execute(script, None, filename)
        except (Exception, SystemExit) as error:
            raise ScriptRaiseError(f"{type(error).__name__}: {error}", filename=filename) from error

    def runtime_bind_global(self, name: str, value: Any) -> None:
        """Publish a named value into the runtime global namespace.

        Args:
            name: Global variable name.
            value: Value to publish.

        Returns:
            None: Binding has no return value.

        Raises:
            ValueError: Raised when name is not a valid identifier.
            RuntimeTerminatedError: Raised when the runtime was terminated.
        """

        self._runtime_ensure_active()
        if not name.isidentifier():
            raise ValueError(f"invalid global name={name!r}")
        self._globals[name] = value

    def runtime_terminate(self) -> None:
        """Run exit hooks in reverse registration order and drop the namespace.

        Returns:
            None: Teardown has no return value.
        """

        if self._terminated:
            return
        self._terminated = True
        while self._exit_hooks:
            exit_hook = self._exit_hooks.pop()
            try:
                exit_hook()
            except Exception:  # pylint: disable=broad-exception-caught
                _LOGGER.warning("runtime exit hook %r failed", exit_hook, exc_info=True)
        self._globals.clear()
        self._loaded_features.clear()

    def runtime_is_terminated(self) -> bool:
        """Return whether the runtime has been terminated.

        Returns:
            bool: True after termination.
        """

        return self._terminated

    def runtime_loaded_features(self) -> tuple[str, ...]:
        """Return features loaded through `require`, sorted by name.

        Returns:
            tuple[str, ...]: Loaded feature names.
        """

        return tuple(sorted(self._loaded_features))

    def _runtime_reset_globals(self) -> None:
        self._globals.clear()
        self._globals.update(
            {
                "__name__": RUNTIME_MODULE_NAME,
                "require": self._runtime_require,
                "load": self._runtime_load,
                "at_exit": self._runtime_at_exit,
                "eval_script": self._runtime_eval_script,
            }
        )

    def _runtime_ensure_active(self) -> None:
        if self._terminated:
            raise RuntimeTerminatedError("runtime has been terminated")

    def _runtime_execute(self, source: str, namespace: dict[str, Any] | None, filename: str) -> Any:
        compiled_script = self._code_cache.cache_get_or_compile(source, filename)
        target_namespace = self._globals if namespace is None else namespace
        exec(compiled_script.body, target_namespace)  # pylint: disable=exec-used
        if compiled_script.result is None:
            return None
        return eval(compiled_script.result, target_namespace)  # pylint: disable=eval-used

    def _runtime_eval_script(
        self,
        source: str,
        namespace: dict[str, Any] | None = None,
        filename: str = "<eval>",
    ) -> Any:
        self._runtime_ensure_active()
        return self._runtime_execute(source, namespace, filename)

    def _runtime_resolve_feature(self, feature: str) -> tuple[str, str]:
        relative_path = feature + SCRIPT_SUFFIX
        for load_path in self._load_paths:
            candidate = load_path / relative_path
            if candidate.is_file():
                return candidate.read_text(encoding="utf-8"), str(candidate)

        bundled_resource = resources.files(__package__).joinpath("resources")
        for path_part in relative_path.split("/"):
            bundled_resource = bundled_resource.joinpath(path_part)
        if bundled_resource.is_file():
            return bundled_resource.read_text(encoding="utf-8"), str(bundled_resource)

        raise ScriptLoadError(f"no such file to load -- {feature}", name=feature)

    def _runtime_load(self, feature: str) -> bool:
        self._runtime_ensure_active()
        normalized_feature = runtime_normalize_feature(feature)
        source, filename = self._runtime_resolve_feature(normalized_feature)
        self._runtime_execute(source, None, filename)
        return True

    def _runtime_require(self, feature: str) -> bool:
        self._runtime_ensure_active()
        normalized_feature = runtime_normalize_feature(feature)
        if normalized_feature in self._loaded_features:
            return False
        self._loaded_features.add(normalized_feature)
        try:
            self._runtime_load(normalized_feature)
        except BaseException:
            self._loaded_features.discard(normalized_feature)
            raise
        return True

    def _runtime_at_exit(self, exit_hook: Callable[[], Any]) -> Callable[[], Any]:
        self._runtime_ensure_active()
        if not callable(exit_hook):
            raise TypeError("at_exit requires a callable")
        self._exit_hooks.append(exit_hook)
        return exit_hook


def runtime_bootstrap(config: RuntimeConfig) -> ScriptRuntime:
    """Allocate one fresh, independent script runtime.

    Args:
        config: Runtime configuration with shared code cache and load paths.

    Returns:
        ScriptRuntime: New runtime; the caller owns its termination.

    Raises:
        ValueError: Raised when config is invalid.
    """

    runtime = ScriptRuntime(config)
    _LOGGER.debug("bootstrapped runtime id=%s load_paths=%s", id(runtime), config.load_paths)
    return runtime
