"""Command line entry point: ``lively-langs server`` and ``lively-langs seed``."""
import argparse
import asyncio
import ipaddress
import logging
import sys
from pathlib import Path
from typing import List, Optional

import uvicorn

from lively_langs.database import DEFAULT_DB_PATH, sqlite_url
from lively_langs.logging_config import get_logger, setup_logging
from lively_langs.main import DEFAULT_STATIC_PATH, DEFAULT_TEMPLATES_PATH, create_app

logger = get_logger(__name__)


def _ip_address(value: str) -> str:
    try:
        return str(ipaddress.ip_address(value))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid IP address: {value}")


def _port(value: str) -> int:
    port = int(value)
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {value}")
    return port


def _existing_dir(value: str) -> Path:
    path = Path(value)
    if not path.is_dir():
        raise argparse.ArgumentTypeError(f"not a directory: {value}")
    return path


def create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lively-langs",
        description="Multilingual dictionary web service",
    )
    parser.add_argument("--log-file", help="Write logs to this file instead of stdout")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    server = subparsers.add_parser("server", help="Run the HTTP server")
    server.add_argument("--ip", type=_ip_address, default="127.0.0.1", help="IP address to use")
    server.add_argument("--port", type=_port, default=8000, help="Port to use")
    server.add_argument("--db", default=DEFAULT_DB_PATH, help="Path to database")
    server.add_argument(
        "--templates", type=_existing_dir, default=DEFAULT_TEMPLATES_PATH, help="Path to templates dir"
    )
    server.add_argument(
        "--static", type=_existing_dir, default=DEFAULT_STATIC_PATH, help="Path to static dir"
    )

    seed = subparsers.add_parser("seed", help="Load sample languages and words")
    seed.add_argument("--db", default=DEFAULT_DB_PATH, help="Path to database")
    seed_mode = seed.add_mutually_exclusive_group()
    seed_mode.add_argument("--clear", action="store_true", help="Delete every language first")
    seed_mode.add_argument("--if-empty", action="store_true", help="Only seed a database with no languages")

    return parser


def run_server(args: argparse.Namespace) -> None:
    app = create_app(
        database_url=sqlite_url(args.db),
        templates_path=args.templates,
        static_path=args.static,
    )
    logger.info(f"Running server on {args.ip}:{args.port}")
    # log_config=None keeps uvicorn on the handlers set up by setup_logging
    uvicorn.run(app, host=args.ip, port=args.port, log_config=None)


def run_seed(args: argparse.Namespace) -> None:
    from lively_langs.seed import seed_database, seed_if_empty
    from lively_langs.store import Store

    async def _seed():
        store = Store(sqlite_url(args.db))
        try:
            await store.init()
            if args.if_empty:
                await seed_if_empty(store)
            else:
                await seed_database(store, clear=args.clear)
        finally:
            await store.close()

    asyncio.run(_seed())


def main(argv: Optional[List[str]] = None) -> int:
    args = create_argument_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level), log_file=args.log_file)

    if args.command == "server":
        run_server(args)
    elif args.command == "seed":
        run_seed(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
