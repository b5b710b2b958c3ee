"""CLI entry point for the Costco item availability server."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import socket
import sys
from typing import Sequence

import uvicorn

from costco_availability.app import SERVICE_TITLE, create_app
from costco_availability.config import Settings, settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
PORT_SEARCH_RANGE = 100

logger = logging.getLogger(__name__)


class PortUnavailableError(Exception):
    """Raised when no free port is found near the requested one."""


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    args = _parse_args(argv)
    requested_port = args.port or settings.port

    _configure_logging(settings.log_level)

    try:
        port = find_available_port(requested_port, host=settings.host)
    except PortUnavailableError as e:
        print(f"  Failed to find available port: {e}")
        sys.exit(1)

    server_settings = dataclasses.replace(settings, port=port)
    _print_banner(server_settings, requested_port)

    try:
        uvicorn.run(
            create_app(server_settings),
            host=server_settings.host,
            port=port,
            log_level=server_settings.log_level.lower(),
            log_config=None,
        )
    except Exception:
        logger.exception("Server stopped after an unexpected error")
        sys.exit(1)
    print("  Server stopped.")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="costco-availability",
        description=SERVICE_TITLE + " Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "API endpoints:\n"
            "  GET  /api/costco?keyword=juice&zipCode=90210&limit=24\n"
            "  POST /api/costco\n"
            '       Body: {"keyword": "juice", "zipCode": "90210", "limit": 24}\n'
            "  POST /api/config\n"
            "  GET  /health\n"
            "\n"
            "Example:\n"
            '  curl "http://localhost:3847/api/costco?keyword=juice&zipCode=90210&limit=5"'
        ),
    )
    parser.add_argument(
        "--port",
        type=int,
        help=f"Port to listen on (default: $PORT or {settings.port})",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def _configure_logging(level: str) -> None:
    log_level = logging.getLevelName(level.upper())
    logging.basicConfig(level=log_level, format=LOG_FORMAT, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx"):
        logging.getLogger(name).setLevel(log_level)


def find_available_port(start_port: int, host: str = "0.0.0.0") -> int:
    """Return the first port from ``start_port`` upward that can be bound."""
    for port in range(start_port, start_port + PORT_SEARCH_RANGE + 1):
        if _port_is_free(host, port):
            return port
    raise PortUnavailableError(
        f"Could not find available port after trying {PORT_SEARCH_RANGE} ports"
    )


def _port_is_free(host: str, port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def _print_banner(server_settings: Settings, requested_port: int) -> None:
    base_url = f"http://localhost:{server_settings.port}"
    print()
    print(f"  {SERVICE_TITLE} Server Running")
    print("  " + "=" * 40)
    if server_settings.port != requested_port:
        print(
            f"  Port {requested_port} was in use, "
            f"using port {server_settings.port}"
        )
    print(f"  {base_url}/api/costco")
    print()
    print("  Example:")
    print(f"  {base_url}/api/costco?keyword=juice&zipCode=90210&limit=5")
    print()
    print("  Methods: GET (query params) | POST (JSON body)")
    print("  Press Ctrl+C to stop")
    print()


if __name__ == "__main__":
    main()
