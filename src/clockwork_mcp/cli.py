#!/usr/bin/env python3
"""CLI interface for the Clockwork MCP Server"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

import httpx
from dotenv import load_dotenv


def load_env_file(env_file: Optional[str] = None) -> None:
    if env_file:
        env_path = Path(env_file)
        if env_path.exists():
            print(f"Loading environment from {env_path}", file=sys.stderr)
            load_dotenv(env_path)
    elif Path(".env").exists():
        print("Loading environment from .env", file=sys.stderr)
        load_dotenv()


def cmd_test_config() -> int:
    from clockwork_mcp.settings import Settings, validate_config

    try:
        validate_config(Settings())
    except ValueError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    return 0


def cmd_status() -> int:
    from clockwork_core.status import get_clockwork_status
    from clockwork_core.storage import FileStorage
    from clockwork_mcp.storage import get_storage_path

    path = get_storage_path()
    status = get_clockwork_status(FileStorage(path), path)
    print(json.dumps(status.to_dict(), indent=2))
    return 0 if status.found else 1


def cmd_health(url: Optional[str]) -> int:
    from clockwork_mcp.settings import settings

    target = url or f"http://{settings.MCP_HOST}:{settings.MCP_PORT}/health"
    try:
        resp = httpx.get(target, timeout=5.0)
        print({"status_code": resp.status_code, "body": resp.text})
        return 0 if resp.status_code == 200 else 2
    except httpx.HTTPError as exc:
        print(f"[ERROR] Health check failed: {exc}", file=sys.stderr)
        return 2


def cmd_serve(host: Optional[str], port: Optional[int]) -> int:
    # Lazy import uvicorn to keep CLI import light
    import uvicorn

    from clockwork_mcp.settings import settings
    from clockwork_mcp.utils.pylogger import get_python_logger, get_uvicorn_log_config

    log = get_python_logger(settings.PYTHON_LOG_LEVEL)
    uvicorn.run(
        "clockwork_mcp.api:app",
        host=host or settings.MCP_HOST,
        port=port or settings.MCP_PORT,
        log_config=get_uvicorn_log_config(settings.PYTHON_LOG_LEVEL),
        reload=False,
        factory=False,
    )
    log.info("Server stopped")
    return 0


def cmd_stdio() -> int:
    from clockwork_mcp.stdio_server import main as stdio_main

    stdio_main()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Clockwork MCP Server")
    parser.add_argument("--env-file")
    parser.add_argument("--test-config", action="store_true", help="Validate settings")

    subparsers = parser.add_subparsers(dest="command")

    p_serve = subparsers.add_parser("serve", help="Run the HTTP server (FastAPI/Uvicorn)")
    p_serve.add_argument("--host", help="Bind host (default from settings)")
    p_serve.add_argument("--port", type=int, help="Bind port (default from settings)")

    subparsers.add_parser("stdio", help="Run the MCP server over STDIO")
    subparsers.add_parser("status", help="Show Clockwork storage status")

    p_health = subparsers.add_parser("health", help="Call the /health endpoint")
    p_health.add_argument("--url", help="Health URL (default http://<host>:<port>/health)")

    return parser


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)

    # settings are read on first import, so the env file must be loaded before
    load_env_file(args.env_file)

    if args.test_config and not args.command:
        return cmd_test_config()

    if args.command == "serve":
        return cmd_serve(args.host, args.port)
    if args.command == "stdio":
        return cmd_stdio()
    if args.command == "status":
        return cmd_status()
    if args.command == "health":
        return cmd_health(args.url)

    # Default action: verify API can import
    from clockwork_mcp.api import app  # noqa: F401
    print("[OK] API import successful", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
