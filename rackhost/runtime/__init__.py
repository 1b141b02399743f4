"""Embedded scripting runtime layer."""

from .code_cache import CodeCacheStats, CompiledCodeCache, CompiledScript, runtime_compile_script
from .errors import RuntimeTerminatedError, ScriptLoadError, ScriptRaiseError
from .interfaces import EmbeddedRuntimePort, RuntimeConfig, RuntimeProvider
from .interpreter import ScriptRuntime, runtime_bootstrap, runtime_normalize_feature

__all__ = [
    "CodeCacheStats",
    "CompiledCodeCache",
    "CompiledScript",
    "EmbeddedRuntimePort",
    "RuntimeConfig",
    "RuntimeProvider",
    "RuntimeTerminatedError",
    "ScriptLoadError",
    "ScriptRaiseError",
    "ScriptRuntime",
    "runtime_bootstrap",
    "runtime_compile_script",
    "runtime_normalize_feature",
]
