"""Tests for compiled-code cache behavior shared across runtimes."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from rackhost.runtime import CompiledCodeCache, runtime_compile_script


def test_runtime_compile_script_splits_trailing_expression() -> None:
    """Compile trailing expression separately so its value can be returned.

    Returns:
        None: Assertions validate compiled script shape.

    Raises:
        AssertionError: Raised when the trailing expression is not split.
    """

    compiled_script = runtime_compile_script("value = 20\nvalue + 22", "<test>")
    namespace: dict[str, object] = {}

    exec(compiled_script.body, namespace)  # pylint: disable=exec-used

    assert compiled_script.result is not None
    assert eval(compiled_script.result, namespace) == 42  # pylint: disable=eval-used


def test_runtime_compile_script_without_trailing_expression_has_no_result() -> None:
    """Leave result code empty when the script ends with a statement.

    Returns:
        None: Assertions validate compiled script shape.

    Raises:
        AssertionError: Raised when a result code object is produced.
    """

    compiled_script = runtime_compile_script("value = 1", "<test>")

    assert compiled_script.result is None


def test_runtime_code_cache_reuses_compiled_script_and_counts_hits() -> None:
    """Serve repeated lookups of the same fragment from the cache.

    Returns:
        None: Assertions validate identity and counters.

    Raises:
        AssertionError: Raised when cache entries are not reused.
    """

    code_cache = CompiledCodeCache()

    first_script = code_cache.cache_get_or_compile("1 + 1", "<a>")
    second_script = code_cache.cache_get_or_compile("1 + 1", "<a>")
    other_file_script = code_cache.cache_get_or_compile("1 + 1", "<b>")

    assert first_script is second_script
    assert other_file_script is not first_script
    stats = code_cache.cache_stats()
    assert stats.entries == 2
    assert stats.hits == 1
    assert stats.misses == 2


def test_runtime_code_cache_concurrent_compiles_share_one_entry() -> None:
    """Return one shared compiled script when many threads compile the same fragment.

    Returns:
        None: Assertions validate concurrent access.

    Raises:
        AssertionError: Raised when threads observe different entries.
    """

    code_cache = CompiledCodeCache()
    source = "total = sum(range(100))\ntotal"

    with ThreadPoolExecutor(max_workers=8) as executor:
        compiled_scripts = list(executor.map(lambda _: code_cache.cache_get_or_compile(source, "<shared>"), range(32)))

    assert all(compiled_script is compiled_scripts[0] for compiled_script in compiled_scripts)
    assert code_cache.cache_stats().entries == 1


def test_runtime_code_cache_does_not_store_syntax_errors() -> None:
    """Propagate syntax errors without caching a broken entry.

    Returns:
        None: Assertions validate error propagation.

    Raises:
        AssertionError: Raised when a broken fragment is cached.
    """

    code_cache = CompiledCodeCache()

    with pytest.raises(SyntaxError):
        code_cache.cache_get_or_compile("def broken(:", "<broken>")

    assert code_cache.cache_stats().entries == 0


def test_runtime_code_cache_clear_resets_entries_and_counters() -> None:
    """Drop entries and counters on clear.

    Returns:
        None: Assertions validate reset.

    Raises:
        AssertionError: Raised when state survives clear.
    """

    code_cache = CompiledCodeCache()
    code_cache.cache_get_or_compile("1", "<a>")
    code_cache.cache_get_or_compile("1", "<a>")

    code_cache.cache_clear()

    stats = code_cache.cache_stats()
    assert (stats.entries, stats.hits, stats.misses) == (0, 0, 0)
