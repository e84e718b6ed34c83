"""
Artist Registry API - Entry Point

Run with: python -m artist_registry [--host HOST] [--port PORT]
"""

import argparse

import uvicorn

from artist_registry.config import get_settings


def parse_args() -> argparse.Namespace:
    """Parse command line arguments; defaults come from settings."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="artist_registry",
        description="Artist Registry API - users, artists and songs behind admin tokens",
    )
    parser.add_argument(
        "--host", type=str, default=settings.host,
        help=f"Host address to bind to (default: {settings.host})",
    )
    parser.add_argument(
        "-p", "--port", type=int, default=settings.port,
        help=f"HTTP port (default: {settings.port})",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    uvicorn.run("artist_registry.main:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
