"""FastAPI route handlers."""

from fastapi import Request, Response
from fastapi.responses import HTMLResponse, PlainTextResponse
from starlette.types import Receive, Scope, Send

from core.protocols import RequestLogger

INDEX_BODY = "Service is running!"
ROBOTS_BODY = "User-agent: *\nDisallow: /"
INDEX_PATHS = ("/", "/index.html")
ROBOTS_PATH = "/robots.txt"


def request_path(request: Request) -> str:
    """Return the request path as received (still percent-encoded)."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        return raw_path.decode("latin-1").split("?", 1)[0]
    return request.url.path


def _has_body(request: Request) -> bool:
    return "content-length" in request.headers or "transfer-encoding" in request.headers


def handle_index() -> Response:
    """Answer / and /index.html with a liveness page."""
    return HTMLResponse(INDEX_BODY, media_type="text/html; charset=utf-8")


def handle_robots() -> Response:
    """Keep crawlers away from the relay."""
    return PlainTextResponse(ROBOTS_BODY, media_type="text/plain; charset=utf-8")


async def handle_relay(request: Request, path: str, query: str) -> Response:
    """Route the request by path prefix and relay it upstream."""
    routing_service = request.app.state.routing_service
    prepared = routing_service.prepare(request.method, path, query, request.headers)
    upstream = request.app.state.upstream_client

    body = request.stream() if _has_body(request) else None
    return await upstream.forward(prepared, body)


async def dispatch(request: Request, logger: RequestLogger) -> Response:
    """Serve the static pages, otherwise relay by prefix."""
    path = request_path(request)
    query = request.url.query
    logger.log_request(request.method, f"{path}?{query}" if query else path)

    if path in INDEX_PATHS:
        return handle_index()
    if path == ROBOTS_PATH:
        return handle_robots()
    return await handle_relay(request, path, query)


class RelayEndpoint:
    """ASGI endpoint for every path and method.

    Mounted as a plain ASGI app so Starlette applies no method filter.
    """

    def __init__(self, logger: RequestLogger) -> None:
        self._logger = logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        response = await dispatch(request, self._logger)
        await response(scope, receive, send)
