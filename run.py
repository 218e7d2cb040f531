#!/usr/bin/env python3
"""
Golden Hour Engine Runner Script.

Usage:
    python run.py              # Serve on HOST:PORT from settings / .env
    python run.py --reload     # Auto-reload on source changes
"""

import argparse

import uvicorn

from goldenhour.config import settings


def main():
    """Run the Golden Hour Engine server."""
    parser = argparse.ArgumentParser(description=settings.APP_NAME)
    parser.add_argument("--host", default=settings.HOST, help="Host to bind to")
    parser.add_argument("--port", type=int, default=settings.PORT, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    print(f"API Docs: http://{args.host}:{args.port}/docs")

    uvicorn.run(
        "goldenhour.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        reload_dirs=["goldenhour"] if args.reload else None,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    main()
