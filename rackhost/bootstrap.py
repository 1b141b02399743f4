"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from rackhost.api import create_api_application
from rackhost.config import AppSettings, config_load_rackup, config_load_settings
from rackhost.rack import RACKUP_INIT_PARAMETER, DefaultRackApplicationFactory, LoggingHostContext


def bootstrap_create_host_context(settings: AppSettings) -> LoggingHostContext:
    """Build the host context publishing the resolved descriptor as init parameter.

    Args:
        settings: Validated application settings.

    Returns:
        LoggingHostContext: Host context for the application factory.

    Raises:
        SettingsLoadError: Raised when the descriptor file cannot be read.
    """

    return LoggingHostContext(init_parameters={RACKUP_INIT_PARAMETER: config_load_rackup(settings)})


def bootstrap_create_application_factory(
    settings: AppSettings,
) -> tuple[DefaultRackApplicationFactory, LoggingHostContext]:
    """Build and initialize the application factory.

    Args:
        settings: Validated application settings.

    Returns:
        tuple[DefaultRackApplicationFactory, LoggingHostContext]: Initialized factory and its host context.

    Raises:
        SettingsLoadError: Raised when the descriptor file cannot be read.
    """

    host_context = bootstrap_create_host_context(settings)
    application_factory = DefaultRackApplicationFactory(load_paths=settings.runtime_load_paths)
    application_factory.factory_init(host_context)
    return application_factory, host_context


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the HTTP application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        FastAPI: Fully wired FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    application_factory, host_context = bootstrap_create_application_factory(resolved_settings)
    return create_api_application(
        settings=resolved_settings,
        application_factory=application_factory,
        host_context=host_context,
    )
