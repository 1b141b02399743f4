"""Application variants produced by the application factory.

`ScriptedRackApplication` owns one runtime and one application object built
inside it. `FallbackRackApplication` is the synthetic stand-in installed when
the error application itself cannot be built; it answers every request with
a fixed 500 response and has no runtime.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from rackhost.domain import (
    ApplicationStateError,
    HostContextPort,
    RackEnvironment,
    RackInitializationError,
    RackResponse,
    UnsupportedOperationError,
)
from rackhost.runtime import EmbeddedRuntimePort, ScriptRaiseError

from .interfaces import ApplicationObjectFactory, RackApplicationPort

FALLBACK_BODY_PREFIX = "Application initialization failed: "


class ApplicationState(str, Enum):
    """Lifecycle states of a scripted application."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    DESTROYED = "destroyed"


class ScriptedRackApplication(RackApplicationPort):
    """Application wrapping one owned runtime and one application object."""

    def __init__(self, runtime: EmbeddedRuntimePort, object_factory: ApplicationObjectFactory):
        """Bind application to its runtime and construction strategy.

        Args:
            runtime: Runtime exclusively owned by this application.
            object_factory: Strategy building the application object in the runtime.

        Raises:
            ValueError: Raised when runtime or object_factory is None.
        """

        if runtime is None:
            raise ValueError("runtime must not be None")
        if object_factory is None:
            raise ValueError("object_factory must not be None")

        self._runtime = runtime
        self._object_factory = object_factory
        self._application_object: Any = None
        self._state = ApplicationState.UNINITIALIZED

    @property
    def application_state(self) -> ApplicationState:
        """Return the current lifecycle state."""

        return self._state

    @property
    def application_object(self) -> Any:
        """Return the bound application object, or None before init."""

        return self._application_object

    def application_init(self) -> None:
        """Build the application object inside the owned runtime.

        Returns:
            None: Initialization has no return value.

        Raises:
            ApplicationStateError: Raised when the application was destroyed.
            RackInitializationError: Raised when the strategy raises in the runtime.
        """

        if self._state is ApplicationState.DESTROYED:
            raise ApplicationStateError("application has been destroyed")
        try:
            self._application_object = self._object_factory(self._runtime)
        except ScriptRaiseError as error:
            raise RackInitializationError.from_error(error) from error
        self._state = ApplicationState.INITIALIZED

    def application_call(self, request: RackEnvironment) -> RackResponse:
        """Delegate one request to the bound application object.

        Calling before `application_init` or after `application_destroy` is
        undefined by the lifecycle contract and rejected explicitly here.

        Args:
            request: Host-neutral request value.

        Returns:
            RackResponse: Response built by the application object.

        Raises:
            ApplicationStateError: Raised when the application is not initialized.
        """

        if self._state is not ApplicationState.INITIALIZED:
            raise ApplicationStateError(f"application_call is invalid in state={self._state.value}")
        return self._application_object.call(request)

    def application_destroy(self) -> None:
        """Terminate the owned runtime.

        Returns:
            None: Teardown has no return value.
        """

        self._runtime.runtime_terminate()
        self._application_object = None
        self._state = ApplicationState.DESTROYED

    def application_get_runtime(self) -> EmbeddedRuntimePort:
        """Return the owned runtime.

        Returns:
            EmbeddedRuntimePort: Owned runtime handle.
        """

        return self._runtime


class FallbackRackApplication(RackApplicationPort):
    """Synthetic error application answering with the captured construction failure."""

    def __init__(self, context: HostContextPort | None, failure: BaseException):
        """Initialize fallback with the failure that prevented error application construction.

        Args:
            context: Host context used to log response render failures.
            failure: Error raised while building the error application.

        Raises:
            ValueError: Raised when failure is None.
        """

        if failure is None:
            raise ValueError("failure must not be None")
        self._context = context
        self._failure = failure

    @property
    def application_failure(self) -> BaseException:
        """Return the captured construction failure."""

        return self._failure

    def application_init(self) -> None:
        """Accept initialization without doing anything."""

    def application_call(self, request: RackEnvironment) -> RackResponse:
        """Return the fixed failure response regardless of the request.

        Args:
            request: Ignored request value.

        Returns:
            RackResponse: Status 500 with empty headers and the failure message.
        """

        _ = request
        return RackResponse(
            status=500,
            headers={},
            body=FALLBACK_BODY_PREFIX + str(self._failure),
            context=self._context,
        )

    def application_destroy(self) -> None:
        """Accept teardown without doing anything."""

    def application_get_runtime(self) -> EmbeddedRuntimePort:
        """Reject runtime access; the fallback has no runtime.

        Raises:
            UnsupportedOperationError: Always raised.
        """

        raise UnsupportedOperationError("not supported")


RackApplication = ScriptedRackApplication | FallbackRackApplication
