"""FastAPI application factory serving requests through the application factory.

The HTTP application owns one shared primary application for its lifetime;
pooling is intentionally left out.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from rackhost.config import AppSettings
from rackhost.domain import HostContextPort
from rackhost.rack import RackApplicationFactoryPort

from .routers import api_create_health_router, api_create_rack_router
from .state import RackHostState


def create_api_application(
    settings: AppSettings,
    application_factory: RackApplicationFactoryPort,
    host_context: HostContextPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        application_factory: Factory already initialized with `host_context`.
        host_context: Host context used for logging request failures.

    Returns:
        FastAPI: Framework application instance.

    Raises:
        ValueError: Raised when application_factory or host_context is None.
    """

    if application_factory is None:
        raise ValueError("application_factory must not be None")
    if host_context is None:
        raise ValueError("host_context must not be None")

    host_state = RackHostState(application_factory=application_factory, host_context=host_context)

    @asynccontextmanager
    async def api_lifespan(_application: FastAPI) -> AsyncIterator[None]:
        host_state.state_start()
        try:
            yield
        finally:
            host_state.state_stop()

    application = FastAPI(
        title=f"Rack Host ({settings.environment_name})",
        lifespan=api_lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    application.state.rack_host = host_state

    application.include_router(api_create_health_router())
    application.include_router(api_create_rack_router())

    return application
