"""
Path-to-responder mapping shared by both servers.
"""
from types import MappingProxyType
from typing import Mapping

from .responders import Responder, echo_responder, version_responder

ECHO_PATH = "/"
VERSION_PATH = "/version"


def build_router(version: str) -> Mapping[str, Responder]:
    """Read-only router with the echo responder at / and the version responder at /version."""
    return MappingProxyType({
        VERSION_PATH: version_responder(version),
        ECHO_PATH: echo_responder,
    })


def resolve(router: Mapping[str, Responder], path: str) -> Responder:
    """Exact match first; everything else falls through to the root responder."""
    return router.get(path) or router[ECHO_PATH]
