"""
Transport-independent responders shared by the FastAPI and stdlib servers.

A responder takes a RequestView and returns a Response. Neither server
touches the body format directly; they only translate their own request and
response objects to and from these types.
"""
import json
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

VERSION_CONTENT_TYPE = "application/json; chatset=utf-8"

TOKEN_PATTERN: re.Pattern = re.compile(r"^[!#$%&'*+\-.\^_`|~0-9A-Za-z]+$")


@dataclass(frozen=True)
class RequestView:
    """Read-only view of an inbound request."""
    path: str
    headers: Optional[Mapping[str, Sequence[str]]] = None
    query: str = ""

    @property
    def url(self) -> str:
        if self.query:
            return f"{self.path}?{self.query}"
        return self.path


@dataclass
class Response:
    status: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)


Responder = Callable[[RequestView], Response]


def canonical_header_key(name: str) -> str:
    """
    Canonical MIME form of a header name: "user-agent" becomes "User-Agent".

    Names containing non-token characters are returned unchanged.
    """
    if TOKEN_PATTERN.match(name) is None:
        return name
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


def group_headers(items: Iterable[Tuple[str, str]]) -> Dict[str, List[str]]:
    """Group (name, value) pairs by name, keeping the order values arrived in."""
    grouped: Dict[str, List[str]] = {}
    for key, value in items:
        grouped.setdefault(key, []).append(value)
    return grouped


def format_echo_body(url: str, headers: Optional[Mapping[str, Sequence[str]]]) -> str:
    """
    Render the echo body.

    Keys are sorted; values of one key keep their order and are quoted
    individually, joined with "; ".
    """
    lines = [f"URL: {url}\n", "Header:\n"]
    for key in sorted(headers or {}):
        values = "; ".join(f'"{value}"' for value in headers[key])
        lines.append(f"{key} -> {values}\n")
    return "".join(lines)


def echo_responder(request: RequestView) -> Response:
    body = format_echo_body(request.url, request.headers)
    return Response(status=200, body=body.encode("utf-8"))


def version_responder(version: str) -> Responder:
    """Build a responder that reports `version` as JSON for any request."""
    payload = json.dumps({"version": version}).encode("utf-8")

    def respond(request: RequestView) -> Response:
        return Response(
            status=200,
            body=payload,
            headers={"Content-Type": VERSION_CONTENT_TYPE},
        )

    return respond
