"""Tests for scripted application lifecycle and runtime ownership."""

from __future__ import annotations

from typing import Any

import pytest

from rackhost.domain import ApplicationStateError, RackEnvironment, RackInitializationError, RackResponse
from rackhost.rack import ApplicationState, ScriptedRackApplication
from rackhost.runtime import ScriptRaiseError


class _FakeRuntime:
    """Runtime double recording teardown calls."""

    def __init__(self) -> None:
        self.terminate_count = 0

    def runtime_evaluate(self, script: str, filename: str = "<script>") -> Any:
        """Return no value.

        Args:
            script: Ignored script.
            filename: Ignored filename.

        Returns:
            Any: Always None.
        """

        _ = (script, filename)
        return None

    def runtime_bind_global(self, name: str, value: Any) -> None:
        """Ignore bindings.

        Args:
            name: Ignored name.
            value: Ignored value.
        """

        _ = (name, value)

    def runtime_terminate(self) -> None:
        """Count teardown calls."""

        self.terminate_count += 1

    def runtime_is_terminated(self) -> bool:
        """Return whether teardown happened.

        Returns:
            bool: True after at least one terminate call.
        """

        return self.terminate_count > 0


class _EchoApplicationObject:
    """Application object double echoing the request path."""

    def call(self, request: RackEnvironment) -> RackResponse:
        """Return a response echoing the request path.

        Args:
            request: Request value.

        Returns:
            RackResponse: Echo response.
        """

        return RackResponse(status=200, headers={"X-Path": request.path}, body=request.path)


def test_rack_application_init_binds_object_built_in_owned_runtime() -> None:
    """Invoke the strategy with the owned runtime and transition to initialized.

    Returns:
        None: Assertions validate binding and state.

    Raises:
        AssertionError: Raised when init does not bind the object.
    """

    runtime = _FakeRuntime()
    seen_runtimes: list[object] = []

    def _object_factory(strategy_runtime: object) -> _EchoApplicationObject:
        seen_runtimes.append(strategy_runtime)
        return _EchoApplicationObject()

    application = ScriptedRackApplication(runtime, _object_factory)
    assert application.application_state is ApplicationState.UNINITIALIZED

    application.application_init()
    response = application.application_call(RackEnvironment(path="/echo"))

    assert seen_runtimes == [runtime]
    assert application.application_state is ApplicationState.INITIALIZED
    assert response.status == 200
    assert response.headers["X-Path"] == "/echo"
    assert application.application_get_runtime() is runtime


def test_rack_application_init_wraps_script_errors() -> None:
    """Convert runtime-level raised errors into RackInitializationError.

    Returns:
        None: Assertions validate error conversion.

    Raises:
        AssertionError: Raised when conversion is missing.
    """

    def _failing_factory(_runtime: object) -> object:
        raise ScriptRaiseError("RuntimeError: descriptor exploded")

    application = ScriptedRackApplication(_FakeRuntime(), _failing_factory)

    with pytest.raises(RackInitializationError, match="descriptor exploded") as error_info:
        application.application_init()

    assert isinstance(error_info.value.__cause__, ScriptRaiseError)
    assert application.application_state is ApplicationState.UNINITIALIZED


def test_rack_application_call_before_init_is_rejected() -> None:
    """Reject calls on an uninitialized application.

    Returns:
        None: Assertions validate lifecycle guard.

    Raises:
        AssertionError: Raised when the call is accepted.
    """

    application = ScriptedRackApplication(_FakeRuntime(), lambda _runtime: _EchoApplicationObject())

    with pytest.raises(ApplicationStateError, match="state=uninitialized"):
        application.application_call(RackEnvironment())


def test_rack_application_destroy_terminates_only_owned_runtime() -> None:
    """Tear down exactly the owned runtime and reject later calls.

    Returns:
        None: Assertions validate runtime ownership.

    Raises:
        AssertionError: Raised when teardown touches other runtimes.
    """

    owned_runtime = _FakeRuntime()
    other_runtime = _FakeRuntime()
    application = ScriptedRackApplication(owned_runtime, lambda _runtime: _EchoApplicationObject())
    other_application = ScriptedRackApplication(other_runtime, lambda _runtime: _EchoApplicationObject())
    application.application_init()
    other_application.application_init()

    application.application_destroy()

    assert owned_runtime.terminate_count == 1
    assert other_runtime.terminate_count == 0
    assert application.application_state is ApplicationState.DESTROYED
    with pytest.raises(ApplicationStateError, match="state=destroyed"):
        application.application_call(RackEnvironment())
    with pytest.raises(ApplicationStateError, match="destroyed"):
        application.application_init()
    assert other_application.application_call(RackEnvironment(path="/still-up")).body == "/still-up"


def test_rack_application_requires_runtime_and_strategy() -> None:
    """Validate constructor dependencies.

    Returns:
        None: Assertions validate input validation.

    Raises:
        AssertionError: Raised when None dependencies are accepted.
    """

    with pytest.raises(ValueError, match="runtime must not be None"):
        ScriptedRackApplication(None, lambda _runtime: None)  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="object_factory must not be None"):
        ScriptedRackApplication(_FakeRuntime(), None)  # type: ignore[arg-type]
