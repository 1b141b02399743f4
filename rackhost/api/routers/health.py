"""Health endpoint router reporting which application serves requests."""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from rackhost.rack import FallbackRackApplication


def api_create_health_router() -> APIRouter:
    """Create health-check router reporting primary and error application state.

    Returns:
        APIRouter: Router exposing `/health` endpoint.
    """

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status(request: Request) -> JSONResponse:
        """Return primary and error application availability.

        Args:
            request: Incoming request carrying application state.

        Returns:
            JSONResponse: `ok` with HTTP 200 when the primary application is up,
                `degraded` with HTTP 503 otherwise.
        """

        host_state = request.app.state.rack_host
        error_application = host_state.application_factory.factory_get_error_application()
        if error_application is None:
            error_application_status = "down"
        elif isinstance(error_application, FallbackRackApplication):
            error_application_status = "fallback"
        else:
            error_application_status = "up"

        if host_state.application is not None:
            payload = {"status": "ok", "application": "up", "error_application": error_application_status}
            return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

        payload = {
            "status": "degraded",
            "application": "down",
            "error_application": error_application_status,
            "detail": host_state.failure_detail,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return router
