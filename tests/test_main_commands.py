"""Tests for diagnostic CLI commands and console logging setup."""

from __future__ import annotations

import logging

import pytest

from rackhost.config import AppSettings
from rackhost.logging import ThirdPartyPrefixFilter, logging_configure
from rackhost.main import main_check_application, main_evaluate_script


def _build_settings(rackup: str | None) -> AppSettings:
    """Create settings carrying one inline descriptor.

    Args:
        rackup: Descriptor source, or None for no descriptor.

    Returns:
        AppSettings: Deterministic settings for diagnostic commands.
    """

    return AppSettings(environment_name="test", rackup=rackup, rackup_path=None)


def test_main_check_application_reports_success(capsys: pytest.CaptureFixture[str]) -> None:
    """Return exit code 0 when the primary application builds.

    Args:
        capsys: Pytest output capture fixture.

    Returns:
        None: Assertions validate command result.

    Raises:
        AssertionError: Raised when the check fails.
    """

    assert main_check_application(_build_settings("run(lambda env: (200, {}, ['ok']))")) == 0
    assert "APPLICATION_OK" in capsys.readouterr().out


def test_main_check_application_reports_failure(capsys: pytest.CaptureFixture[str]) -> None:
    """Return exit code 1 with the failure message when the descriptor raises.

    Args:
        capsys: Pytest output capture fixture.

    Returns:
        None: Assertions validate command result.

    Raises:
        AssertionError: Raised when the failure is not reported.
    """

    assert main_check_application(_build_settings("raise ValueError('broken descriptor')")) == 1
    assert "APPLICATION_INIT_FAILED: ValueError: broken descriptor" in capsys.readouterr().out


def test_main_check_application_reports_descriptor_exit(capsys: pytest.CaptureFixture[str]) -> None:
    """Report a descriptor calling `sys.exit` as an initialization failure.

    Args:
        capsys: Pytest output capture fixture.

    Returns:
        None: Assertions validate command result.

    Raises:
        AssertionError: Raised when the exit escapes the command.
    """

    assert main_check_application(_build_settings("import sys\nsys.exit('bye')")) == 1
    assert "APPLICATION_INIT_FAILED: SystemExit: bye" in capsys.readouterr().out


def test_main_evaluate_script_returns_result_text() -> None:
    """Evaluate a script in a bootstrapped runtime.

    Returns:
        None: Assertions validate evaluation output.

    Raises:
        AssertionError: Raised when evaluation output is unexpected.
    """

    settings = _build_settings(None)

    assert main_evaluate_script(settings, "1 + 2") == "3"
    assert main_evaluate_script(settings, "rack_context is not None") == "True"


def test_logging_prefix_filter_marks_third_party_records() -> None:
    """Prefix third-party records and leave project records unprefixed.

    Returns:
        None: Assertions validate record annotation.

    Raises:
        AssertionError: Raised when prefixes are unexpected.
    """

    prefix_filter = ThirdPartyPrefixFilter()
    third_party_record = logging.LogRecord("uvicorn.error", logging.INFO, __file__, 1, "msg", None, None)
    project_record = logging.LogRecord("rackhost.context", logging.INFO, __file__, 1, "msg", None, None)

    assert prefix_filter.filter(third_party_record) is True
    assert prefix_filter.filter(project_record) is True
    assert third_party_record.prefix == "[uvicorn]"
    assert project_record.prefix == ""


def test_logging_configure_installs_single_console_handler() -> None:
    """Replace a previously installed console handler instead of stacking handlers.

    Returns:
        None: Assertions validate handler installation.

    Raises:
        AssertionError: Raised when handlers accumulate.
    """

    root_logger = logging.getLogger()
    previous_level = root_logger.level
    try:
        first_handler = logging_configure("WARNING")
        second_handler = logging_configure("INFO")

        assert first_handler not in root_logger.handlers
        assert second_handler in root_logger.handlers
        assert root_logger.level == logging.INFO
    finally:
        root_logger.removeHandler(second_handler)
        root_logger.setLevel(previous_level)
