"""API layer package for the HTTP host binding."""

from .application import create_api_application
from .sink import StarletteResponseSink
from .state import RackHostState

__all__ = ["RackHostState", "StarletteResponseSink", "create_api_application"]
