"""Thread-safe compiled-code cache shared across runtime instances."""

from __future__ import annotations

import ast
from dataclasses import dataclass
import threading
from types import CodeType


@dataclass(frozen=True)
class CompiledScript:
    """Compiled form of one script fragment.

    Attributes:
        body: Code object for all statements except a trailing expression.
        result: Code object for the trailing expression statement, if any.
    """

    body: CodeType
    result: CodeType | None


@dataclass(frozen=True)
class CodeCacheStats:
    """Counters describing cache effectiveness.

    Attributes:
        entries: Number of cached compiled scripts.
        hits: Lookups served from the cache.
        misses: Lookups that required compilation.
    """

    entries: int
    hits: int
    misses: int


def runtime_compile_script(source: str, filename: str) -> CompiledScript:
    """Compile script source, splitting off a trailing expression statement.

    Args:
        source: Script source text.
        filename: Filename reported in tracebacks.

    Returns:
        CompiledScript: Compiled body and optional result expression.

    Raises:
        SyntaxError: Raised when the source cannot be parsed.
    """

    module = ast.parse(source, filename=filename, mode="exec")
    result_code = None
    if module.body and isinstance(module.body[-1], ast.Expr):
        trailing_expression = module.body.pop()
        result_code = compile(ast.Expression(body=trailing_expression.value), filename, "eval")
    return CompiledScript(body=compile(module, filename, "exec"), result=result_code)


class CompiledCodeCache:
    """Compiled scripts keyed by filename and source, safe for concurrent readers.

    Compilation happens outside the lock; when two runtimes compile the same
    fragment concurrently the first stored result wins.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], CompiledScript] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def cache_get_or_compile(self, source: str, filename: str) -> CompiledScript:
        """Return the compiled form of a script, compiling it on first use.

        Args:
            source: Script source text.
            filename: Filename reported in tracebacks.

        Returns:
            CompiledScript: Cached compiled script.

        Raises:
            SyntaxError: Raised when the source cannot be parsed.
        """

        cache_key = (filename, source)
        with self._lock:
            cached_script = self._entries.get(cache_key)
            if cached_script is not None:
                self._hits += 1
                return cached_script
            self._misses += 1

        compiled_script = runtime_compile_script(source, filename)
        with self._lock:
            return self._entries.setdefault(cache_key, compiled_script)

    def cache_stats(self) -> CodeCacheStats:
        """Return a snapshot of cache counters.

        Returns:
            CodeCacheStats: Entry, hit and miss counts.
        """

        with self._lock:
            return CodeCacheStats(entries=len(self._entries), hits=self._hits, misses=self._misses)

    def cache_clear(self) -> None:
        """Drop all cached entries and reset counters."""

        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
