"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from api.handlers import RelayEndpoint
from core.config import Config
from core.exceptions import RouteNotFound, UpstreamCallError
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.router import PrefixRouter
from services.routing_service import RoutingService
from services.upstream import UpstreamClient


def build_upstream_client(
    config: Config,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the shared client used for every upstream call."""
    limits = httpx.Limits(
        max_connections=config.limits.max_connections,
        max_keepalive_connections=config.limits.max_keepalive_connections,
    )
    return httpx.AsyncClient(
        timeout=config.limits.upstream_timeout,
        limits=limits,
        transport=transport,
        follow_redirects=True,
        # Relay upstream bytes as-is, so Content-Length stays valid
        headers={"Accept-Encoding": "identity"},
    )


def create_app(
    config: Config,
    logger: RequestLogger,
    upstream_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    When `upstream_client` is given it is used as-is and left open on shutdown.
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if upstream_client is not None:
            yield
            return
        client = build_upstream_client(config)
        app.state.upstream_client = UpstreamClient(client, logger)
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(
        title="API Relay",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.routing_service = RoutingService(
        logger=logger,
        router=PrefixRouter(),
        header_builder=HeaderBuilder(logger),
    )
    if upstream_client is not None:
        app.state.upstream_client = UpstreamClient(upstream_client, logger)

    @app.exception_handler(RouteNotFound)
    async def route_not_found(_request: Request, exc: RouteNotFound):
        logger.log_not_found(exc.path)
        return PlainTextResponse("Not Found", status_code=404)

    @app.exception_handler(UpstreamCallError)
    async def upstream_call_failed(_request: Request, exc: UpstreamCallError):
        logger.log_error(exc.target_url, exc.detail)
        return PlainTextResponse("Internal Server Error", status_code=500)

    # Any path, any method: static pages and prefix routing happen in the endpoint
    app.add_route("/{path:path}", RelayEndpoint(logger), methods=None)

    return app
