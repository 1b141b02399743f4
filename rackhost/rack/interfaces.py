"""Typed interfaces for application lifecycle and factory responsibilities."""

from __future__ import annotations

from typing import Any, Callable, Protocol

from rackhost.domain import HostContextPort, RackEnvironment, RackResponse
from rackhost.runtime import EmbeddedRuntimePort

ApplicationObjectFactory = Callable[[EmbeddedRuntimePort], Any]


class RackApplicationPort(Protocol):
    """Port definition for one request-handling application instance."""

    def application_init(self) -> None:
        """Construct and bind the application object.

        Returns:
            None: Initialization has no return value.

        Raises:
            RackInitializationError: Raised when object construction fails.
        """

    def application_call(self, request: RackEnvironment) -> RackResponse:
        """Handle one request.

        Args:
            request: Host-neutral request value.

        Returns:
            RackResponse: Response produced by the application object.

        Raises:
            ApplicationStateError: Raised when the application is not initialized.
        """

    def application_destroy(self) -> None:
        """Tear down the application and its runtime.

        Returns:
            None: Teardown has no return value.

        Raises:
            RuntimeError: Implementations do not raise for the first call.
        """

    def application_get_runtime(self) -> EmbeddedRuntimePort:
        """Return the runtime owned by this application.

        Returns:
            EmbeddedRuntimePort: Owned runtime handle.

        Raises:
            UnsupportedOperationError: Raised by variants without a runtime.
        """


class RackApplicationFactoryPort(Protocol):
    """Port definition for creating and releasing application instances."""

    def factory_init(self, context: HostContextPort) -> None:
        """Prepare the factory for one deployment.

        Args:
            context: Host serving environment context.

        Returns:
            None: Initialization has no return value.
        """

    def factory_new_application(self) -> RackApplicationPort:
        """Return a new uninitialized application.

        Returns:
            RackApplicationPort: Application with its own runtime.

        Raises:
            RackInitializationError: Raised when runtime bootstrap fails.
        """

    def factory_get_application(self) -> RackApplicationPort:
        """Return a new initialized application.

        Returns:
            RackApplicationPort: Ready application.

        Raises:
            RackInitializationError: Raised when bootstrap or init fails.
        """

    def factory_finished_with_application(self, application: RackApplicationPort) -> None:
        """Release an application obtained from this factory.

        Args:
            application: Application to destroy.

        Returns:
            None: Release has no return value.
        """

    def factory_get_error_application(self) -> RackApplicationPort | None:
        """Return the shared error application.

        Returns:
            RackApplicationPort | None: Error application; None only before init or after destroy.
        """

    def factory_destroy(self) -> None:
        """Release factory-held resources.

        Returns:
            None: Teardown has no return value.
        """
