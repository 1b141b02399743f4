"""Catch-all router dispatching HTTP requests to the served application."""

from dataclasses import replace

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from rackhost.domain import RackEnvironment, RackResponse

from ..sink import StarletteResponseSink

RACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
INTERNAL_ERROR_BODY = "Internal Server Error"


async def api_build_rack_environment(request: Request) -> RackEnvironment:
    """Convert a framework request into a host-neutral request value.

    Args:
        request: Incoming framework request.

    Returns:
        RackEnvironment: Request value passed to the application.
    """

    return RackEnvironment(
        method=request.method.upper(),
        path=request.url.path,
        query_string=request.url.query,
        headers={name.lower(): value for name, value in request.headers.items()},
        body=await request.body(),
        scheme=request.url.scheme,
        server_name=request.url.hostname or "localhost",
        server_port=request.url.port or (443 if request.url.scheme == "https" else 80),
    )


def api_create_rack_router() -> APIRouter:
    """Create router forwarding every remaining path to the served application.

    Returns:
        APIRouter: Catch-all router.
    """

    router = APIRouter(tags=["rack"])

    @router.api_route("/{path:path}", methods=RACK_METHODS, include_in_schema=False)
    async def api_rack_dispatch(request: Request, path: str) -> Response:
        """Call the served application, falling back to the error application when it raises.

        Args:
            request: Incoming framework request.
            path: Matched path; the full path is read from the request.

        Returns:
            Response: Rendered application response.
        """

        _ = path
        host_state = request.app.state.rack_host
        rack_environment = await api_build_rack_environment(request)
        application = host_state.state_serving_application()
        if application is None:
            return PlainTextResponse("Application unavailable", status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

        try:
            rack_response: RackResponse = await run_in_threadpool(application.application_call, rack_environment)
        except (Exception, SystemExit) as error:  # pylint: disable=broad-exception-caught
            host_state.host_context.context_log("Error: application call failed", error)
            error_application = host_state.application_factory.factory_get_error_application()
            if error_application is None or error_application is application:
                return PlainTextResponse(INTERNAL_ERROR_BODY, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
            try:
                rack_response = await run_in_threadpool(
                    error_application.application_call,
                    replace(rack_environment, exception=error),
                )
            except (Exception, SystemExit) as error_application_error:  # pylint: disable=broad-exception-caught
                host_state.host_context.context_log("Error: error application call failed", error_application_error)
                return PlainTextResponse(INTERNAL_ERROR_BODY, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        sink = StarletteResponseSink()
        rack_response.response_respond(sink)
        return sink.sink_to_response()

    return router
