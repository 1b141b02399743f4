"""API routers for health checks and application dispatch."""

from .health import api_create_health_router
from .rack import api_create_rack_router, api_build_rack_environment

__all__ = ["api_build_rack_environment", "api_create_health_router", "api_create_rack_router"]
