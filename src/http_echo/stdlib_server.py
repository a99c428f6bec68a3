"""
Echo server using Python stdlib http.server.

Serves the same router as the FastAPI app without uvicorn. Useful where an
ASGI server is not available.
"""
import logging
import socket
import threading
from http.server import HTTPServer, BaseHTTPRequestHandler
from typing import Mapping, Type
from urllib.parse import urlsplit

from .core import RequestView, Responder, Response, canonical_header_key, group_headers, resolve

logger = logging.getLogger(__name__)


class EchoRequestHandler(BaseHTTPRequestHandler):
    """HTTP request handler that dispatches every method through a router."""

    router: Mapping[str, Responder] = {}

    def log_message(self, format, *args):
        logger.info(f"[{self.client_address[0]}] {format % args}")

    def request_view(self) -> RequestView:
        url = urlsplit(self.path)
        return RequestView(
            path=url.path,
            headers=group_headers(
                (canonical_header_key(key), value) for key, value in self.headers.items()
            ),
            query=url.query,
        )

    def send(self, response: Response, include_body: bool = True):
        self.send_response(response.status)
        for key, value in response.headers.items():
            self.send_header(key, value)
        self.send_header("Content-Length", str(len(response.body)))
        self.end_headers()
        if include_body:
            self.wfile.write(response.body)

    def dispatch(self, include_body: bool = True):
        view = self.request_view()
        responder = resolve(self.router, view.path)
        self.send(responder(view), include_body)

    def do_GET(self):
        self.dispatch()

    def do_HEAD(self):
        self.dispatch(include_body=False)

    def do_POST(self):
        self.dispatch()

    def do_PUT(self):
        self.dispatch()

    def do_DELETE(self):
        self.dispatch()

    def do_PATCH(self):
        self.dispatch()

    def do_OPTIONS(self):
        self.dispatch()


def make_handler(router: Mapping[str, Responder]) -> Type[EchoRequestHandler]:
    """Bind a router to a handler class, as HTTPServer takes a class, not an instance."""
    return type("BoundEchoRequestHandler", (EchoRequestHandler,), {"router": router})


class ThreadedHTTPServer(HTTPServer):
    """HTTP server that handles each request in a new thread."""

    def __init__(self, server_address, RequestHandlerClass, bind_and_activate=True):
        # IPv6 literals need an AF_INET6 socket
        if ":" in server_address[0]:
            self.address_family = socket.AF_INET6
        super().__init__(server_address, RequestHandlerClass, bind_and_activate)

    def process_request(self, request, client_address):
        thread = threading.Thread(target=self.process_request_thread, args=(request, client_address))
        thread.daemon = True
        thread.start()

    def process_request_thread(self, request, client_address):
        try:
            self.finish_request(request, client_address)
        except Exception:
            self.handle_error(request, client_address)
        finally:
            self.shutdown_request(request)


def create_stdlib_server(config) -> ThreadedHTTPServer:
    """Bind a threaded server for a ServerConfig. Raises OSError if the address is taken."""
    return ThreadedHTTPServer(config.host_port(), make_handler(config.router))


def run_stdlib(config):
    server = create_stdlib_server(config)
    host, port = server.server_address[:2]

    logger.info(f"Stdlib HTTP server listening on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    finally:
        server.server_close()
