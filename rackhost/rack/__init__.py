"""Application lifecycle and factory layer."""

from .application import (
    FALLBACK_BODY_PREFIX,
    ApplicationState,
    FallbackRackApplication,
    RackApplication,
    ScriptedRackApplication,
)
from .context import CONTEXT_LOGGER_NAME, LoggingHostContext
from .factory import (
    ADAPTER_BOOTSTRAP_SCRIPT,
    ERROR_APPLICATION_RACKUP,
    ERROR_APPLICATION_WARNING,
    RACK_CONTEXT_GLOBAL,
    RACKUP_INIT_PARAMETER,
    DefaultRackApplicationFactory,
)
from .interfaces import ApplicationObjectFactory, RackApplicationFactoryPort, RackApplicationPort

__all__ = [
    "ADAPTER_BOOTSTRAP_SCRIPT",
    "ApplicationObjectFactory",
    "ApplicationState",
    "CONTEXT_LOGGER_NAME",
    "DefaultRackApplicationFactory",
    "ERROR_APPLICATION_RACKUP",
    "ERROR_APPLICATION_WARNING",
    "FALLBACK_BODY_PREFIX",
    "FallbackRackApplication",
    "LoggingHostContext",
    "RACKUP_INIT_PARAMETER",
    "RACK_CONTEXT_GLOBAL",
    "RackApplication",
    "RackApplicationFactoryPort",
    "RackApplicationPort",
    "ScriptedRackApplication",
]
