#!/usr/bin/env python3
"""
HTTP Echo CLI

Usage:
    http-echo serve                          # FastAPI/uvicorn on ECHO_HOST:ECHO_PORT
    http-echo serve --stdlib                 # stdlib http.server
    http-echo serve --addr :8080 --version 2.1.0
    http-echo probe --url http://127.0.0.1:3000
"""

import asyncio
import argparse
import sys

import httpx

from .core import Config, VERSION_PATH, setup_logging


async def probe_version(url: str) -> bool:
    """Fetch <url>/version and print the reported version."""
    target = f"{url.rstrip('/')}{VERSION_PATH}"

    async with httpx.AsyncClient(timeout=10.0) as client:
        try:
            response = await client.get(target)
        except httpx.HTTPError as e:
            print(f"✗ Cannot connect to {target}: {e}", file=sys.stderr)
            return False

    if response.status_code != 200:
        print(f"✗ {target} returned {response.status_code}", file=sys.stderr)
        return False

    try:
        payload = response.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        print(f"✗ {target} did not return a JSON object", file=sys.stderr)
        return False

    version = payload.get("version", "unknown")
    print(f"✓ {url} is running version {version}")
    print(f"  Content-Type: {response.headers.get('content-type')}")
    return True


def cmd_serve(args) -> int:
    from .main import create_server, serve

    logger = setup_logging()
    version = args.version if args.version is not None else Config.ECHO_VERSION

    try:
        addr = args.addr or Config.default_addr()
        config = create_server(addr, version)
        logger.info(f"Serving version {version!r} on {config.addr}")
        serve(config, stdlib=args.stdlib)
    except ValueError as e:
        logger.error(f"Invalid listen address: {e}")
        return 1
    except OSError as e:
        logger.error(f"Cannot listen on {config.addr}: {e}")
        return 1
    return 0


def cmd_probe(args) -> int:
    try:
        url = args.url or f"http://{Config.default_addr()}"
    except ValueError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1
    return 0 if asyncio.run(probe_version(url)) else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="http-echo",
        description="HTTP Echo - echo request URL and headers, report a version",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  http-echo serve --addr localhost:3000     Start the echo server
  http-echo probe                           Check a running server
        """
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the echo server")
    serve_parser.add_argument("--addr", help="Listen address, host:port (default: ECHO_HOST:ECHO_PORT)")
    serve_parser.add_argument("--version", help="Version reported at /version (default: ECHO_VERSION)")
    serve_parser.add_argument(
        "--stdlib", "-s",
        action="store_true",
        help="Use stdlib http.server instead of uvicorn"
    )
    serve_parser.set_defaults(func=cmd_serve)

    probe_parser = subparsers.add_parser("probe", help="Query /version on a running server")
    probe_parser.add_argument("--url", help="Base URL (default: http://ECHO_HOST:ECHO_PORT)")
    probe_parser.set_defaults(func=cmd_probe)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
