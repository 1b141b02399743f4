"""Request/response adapter loaded into every runtime at bootstrap.

Evaluated inside a runtime namespace: `rack_context` is bound by the host
before this script runs.
"""

import io

from rackhost.domain import RackResponse

RACK_VERSION = (1, 3)


def rack_build_env(request):
    """Translate a host request into a pipeline environment mapping."""

    env = {
        "REQUEST_METHOD": request.method,
        "SCRIPT_NAME": "",
        "PATH_INFO": request.path,
        "QUERY_STRING": request.query_string,
        "SERVER_NAME": request.server_name,
        "SERVER_PORT": str(request.server_port),
        "rack.version": RACK_VERSION,
        "rack.url_scheme": request.scheme,
        "rack.input": io.BytesIO(request.body),
        "rack.errors": io.StringIO(),
        "rack.context": rack_context,
    }
    for name, value in request.headers.items():
        key = name.upper().replace("-", "_")
        if key in ("CONTENT_TYPE", "CONTENT_LENGTH"):
            env[key] = value
        else:
            env["HTTP_" + key] = value
    if request.exception is not None:
        env["rack.exception"] = request.exception
    return env


def rack_collect_body(body):
    chunks = []
    try:
        for chunk in body:
            chunks.append(chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk))
    finally:
        close = getattr(body, "close", None)
        if close is not None:
            close()
    return b"".join(chunks)


class ServletHandler:
    """Expose a pipeline callable as an application object with `call(request)`."""

    def __init__(self, app):
        self.app = app

    def call(self, request):
        status, headers, body = self.app(rack_build_env(request))
        return RackResponse(
            status=int(status),
            headers=dict(headers),
            body=rack_collect_body(body),
            context=rack_context,
        )
