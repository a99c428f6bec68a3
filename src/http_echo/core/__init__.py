# Core shared modules for both FastAPI and stdlib servers
from .config import Config, setup_logging
from .responders import (
    VERSION_CONTENT_TYPE,
    RequestView,
    Response,
    Responder,
    canonical_header_key,
    group_headers,
    format_echo_body,
    echo_responder,
    version_responder,
)
from .router import ECHO_PATH, VERSION_PATH, build_router, resolve

__all__ = [
    # Config
    "Config",
    "setup_logging",
    # Responders
    "VERSION_CONTENT_TYPE",
    "RequestView",
    "Response",
    "Responder",
    "canonical_header_key",
    "group_headers",
    "format_echo_body",
    "echo_responder",
    "version_responder",
    # Router
    "ECHO_PATH",
    "VERSION_PATH",
    "build_router",
    "resolve",
]
