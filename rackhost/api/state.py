"""Shared host state holding the one application served over HTTP."""

from __future__ import annotations

from dataclasses import dataclass

from rackhost.domain import HostContextPort, RackInitializationError
from rackhost.rack import RackApplicationFactoryPort, RackApplicationPort


@dataclass
class RackHostState:
    """Mutable host-side state for one deployment.

    Attributes:
        application_factory: Initialized application factory.
        host_context: Host context used for logging.
        application: Shared primary application, or None when it failed to build.
        failure_detail: Message of the last primary application build failure.
    """

    application_factory: RackApplicationFactoryPort
    host_context: HostContextPort
    application: RackApplicationPort | None = None
    failure_detail: str | None = None

    def state_start(self) -> None:
        """Build the shared primary application, keeping the error application on failure.

        Returns:
            None: State is updated in place.
        """

        try:
            self.application = self.application_factory.factory_get_application()
            self.failure_detail = None
        except RackInitializationError as error:
            self.host_context.context_log("Error: application could not be initialized", error)
            self.application = None
            self.failure_detail = str(error)

    def state_stop(self) -> None:
        """Release the shared application and the factory.

        Returns:
            None: State is updated in place.
        """

        if self.application is not None:
            self.application_factory.factory_finished_with_application(self.application)
            self.application = None
        self.application_factory.factory_destroy()

    def state_serving_application(self) -> RackApplicationPort | None:
        """Return the application that should answer the next request.

        Returns:
            RackApplicationPort | None: Primary application, else the error application.
        """

        if self.application is not None:
            return self.application
        return self.application_factory.factory_get_error_application()
