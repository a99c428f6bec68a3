import logging
from dataclasses import dataclass
from typing import Mapping, Tuple

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import Response as HTTPResponse

from . import __version__
from .core import (
    Config,
    ECHO_PATH,
    RequestView,
    Responder,
    Response,
    build_router,
    canonical_header_key,
    group_headers,
)

logger = logging.getLogger(__name__)

# The root responder answers every method, like a mux pattern registered at /
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]


def to_request_view(request: Request) -> RequestView:
    """Project a Starlette request onto the transport-independent view."""
    headers = group_headers(
        (canonical_header_key(key.decode("latin-1")), value.decode("latin-1"))
        for key, value in request.headers.raw
    )
    return RequestView(path=request.url.path, headers=headers, query=request.url.query)


def to_http_response(response: Response) -> HTTPResponse:
    return HTTPResponse(
        content=response.body,
        status_code=response.status,
        headers=response.headers,
    )


def _endpoint(responder: Responder):
    async def endpoint(request: Request):
        view = to_request_view(request)
        response = responder(view)
        logger.debug(f"{request.method} {view.url} -> {response.status}")
        return to_http_response(response)
    return endpoint


def create_app(router: Mapping[str, Responder], version: str = __version__) -> FastAPI:
    """
    Build the FastAPI application for a router.

    Fixed paths are registered first; the root responder is registered last as
    a catch-all so it answers any path the router does not name.
    """
    app = FastAPI(
        title="HTTP Echo",
        description="Echoes request URL and headers; reports its version",
        version=version or __version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    for path, responder in router.items():
        if path == ECHO_PATH:
            continue
        app.add_api_route(path, _endpoint(responder), methods=ALL_METHODS)

    app.add_api_route("/{path:path}", _endpoint(router[ECHO_PATH]), methods=ALL_METHODS)
    return app


def split_host_port(addr: str) -> Tuple[str, int]:
    """Split host:port (or [v6]:port, or :port) into a bind tuple."""
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"Invalid listen address {addr!r}, expected host:port")
    host = host.strip("[]")
    # Empty host listens on all interfaces
    return host or "0.0.0.0", int(port)


@dataclass(frozen=True)
class ServerConfig:
    """Listener configuration. Inert: nothing is bound until serve() is called."""
    addr: str
    router: Mapping[str, Responder]
    handler: FastAPI

    def host_port(self) -> Tuple[str, int]:
        return split_host_port(self.addr)


def create_server(addr: str, version: str) -> ServerConfig:
    router = build_router(version)
    return ServerConfig(addr=addr, router=router, handler=create_app(router, version))


def serve(config: ServerConfig, stdlib: bool = False) -> None:
    """Run the configured server until interrupted."""
    host, port = config.host_port()

    if stdlib:
        from .stdlib_server import run_stdlib
        run_stdlib(config)
        return

    logger.info(f"Starting FastAPI/uvicorn server on {host}:{port}")
    uvicorn.run(
        config.handler,
        host=host,
        port=port,
        log_level=Config.LOG_LEVEL.lower(),
        http='h11',   # HTTP/1.1 only
        ws='none',
    )


# Module-level app for `uvicorn http_echo.main:app`; uvicorn picks the bind address
app = create_app(build_router(Config.ECHO_VERSION), Config.ECHO_VERSION)
