#!/usr/bin/env python3
"""
Startup script for the Office Desk API server.

Usage:
    python start_api.py              # Development mode, auto-reload
    python start_api.py --prod       # Production mode
    python start_api.py --port 8080  # Custom port
"""

import argparse
import os

import uvicorn


def build_config(args: argparse.Namespace) -> dict:
    """Translate command line flags into ``uvicorn.run`` keyword arguments."""
    config = {
        "app": "api.main:app",
        "host": args.host,
        "port": args.port,
        "loop": "asyncio",
        "http": "h11",
    }
    if args.prod:
        config.update({"workers": args.workers, "log_level": "info"})
    else:
        config["log_level"] = "debug"
        if not args.no_reload:
            config.update({
                "reload": True,
                "reload_dirs": ["api", "agenda", "sheets"],
                "reload_delay": 1.0,
            })
    return config


def main(argv=None):
    """Start the FastAPI server with configurable options."""
    parser = argparse.ArgumentParser(description="Start the Office Desk API")
    parser.add_argument("--host", default=os.getenv("OMS_HOST", "127.0.0.1"), help="Host to bind to")
    parser.add_argument("--port", type=int, default=int(os.getenv("OMS_PORT", "8001")), help="Port to bind to")
    parser.add_argument("--prod", action="store_true", help="Production mode (no auto-reload)")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes in production mode")
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload in development mode")
    args = parser.parse_args(argv)

    mode = "PRODUCTION" if args.prod else "DEVELOPMENT"
    print(f"🚀 Starting Office Desk API in {mode} mode")
    print(f"   📍 http://{args.host}:{args.port}")
    if not args.prod:
        print(f"   📚 API docs: http://{args.host}:{args.port}/docs")

    uvicorn.run(**build_config(args))


if __name__ == "__main__":
    main()
