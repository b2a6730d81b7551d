#!/usr/bin/env python3
"""
Blogstack -- run one of the two services.

Usage:
  python main.py comments
  python main.py auth
  python main.py auth --port 3001
  python main.py comments --host 127.0.0.1 --reload

Environment variables:
  JWT_KEY          Signing key for session tokens (auth service).
  AUTH_DB_URL      SQLAlchemy URL for the user store. Default: sqlite file.
  COMMENTS_DB_URL  SQLAlchemy URL for comments. Default: in memory.
  SECURE_COOKIES   Set to true to mark the session cookie Secure.
"""

import argparse

import uvicorn

from core.config import get_settings

_APPS = {
    "comments": "asgi:comments_app",
    "auth": "asgi:auth_app",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a blogstack service.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("service", choices=sorted(_APPS), help="Which service to run.")
    parser.add_argument("--host", default=None, help="Bind address (default from settings).")
    parser.add_argument("--port", type=int, default=None, help="Port (default from settings).")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes.")
    return parser


def resolve_bind(service: str, host: str | None, port: int | None) -> tuple[str, int]:
    """Fill in whichever of host/port was not given from the service's settings."""
    settings = get_settings()
    if service == "comments":
        return host or settings.comments_host, port or settings.comments_port
    return host or settings.auth_host, port or settings.auth_port


def main() -> None:
    args = build_parser().parse_args()
    host, port = resolve_bind(args.service, args.host, args.port)
    print(f"  {args.service} service listening on {host}:{port}")
    uvicorn.run(_APPS[args.service], host=host, port=port, reload=args.reload)


if __name__ == "__main__":
    main()
