"""
CLI entry point for the box registration server.

Usage:
    # Serve the HTTP API
    python -m app.cli serve --port 8000

    # Evict registrations older than the configured TTL
    python -m app.cli evict

    # Evict registrations older than 10 minutes
    python -m app.cli evict --max-age 600

    # List registrations behind an address
    python -m app.cli list --ip 203.0.113.7

    # Delete every registration (maintenance only)
    python -m app.cli clear --yes
"""

import argparse
import logging
import sys

from app.core.config import settings
from app.domain.boxes.entities import ByPublicIp
from app.domain.boxes.errors import StorageFault
from app.infrastructure.boxes.record_store import SqlRecordStore
from app.shared.logging import configure_logging

logger = logging.getLogger(__name__)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI application under uvicorn."""
    import uvicorn

    logger.info("Starting box registration server at http://%s:%d", args.host, args.port)
    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=False)


def cmd_evict(args: argparse.Namespace) -> None:
    """Remove registrations older than the given age."""
    max_age = args.max_age if args.max_age is not None else settings.box_ttl_seconds
    with SqlRecordStore(settings.database_url) as store:
        removed = store.delete_older_than(store.now() - max_age)
    logger.info("Evicted %d registrations older than %ds.", removed, max_age)


def cmd_list(args: argparse.Namespace) -> None:
    """Print the registrations behind an address."""
    with SqlRecordStore(settings.database_url) as store:
        records = store.find(ByPublicIp(args.ip))
    if not records:
        logger.info("No registrations for %s.", args.ip)
        return
    for record in records:
        print(
            f"{record.public_ip}\t{record.message}\t"
            f"{int(record.tunnel_configured)}\t{record.timestamp}"
        )


def cmd_clear(args: argparse.Namespace) -> None:
    """Delete every registration and compact the database."""
    if not args.yes:
        logger.error("Refusing to clear without --yes.")
        sys.exit(2)
    with SqlRecordStore(settings.database_url, allow_clear=True) as store:
        store.clear()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Box registration server CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")
    serve_parser.set_defaults(func=cmd_serve)

    # Evict
    evict_parser = subparsers.add_parser("evict", help="Evict stale registrations")
    evict_parser.add_argument(
        "--max-age", type=int, default=None, dest="max_age",
        help="Maximum age in seconds (default: BOX_TTL_SECONDS)",
    )
    evict_parser.set_defaults(func=cmd_evict)

    # List
    list_parser = subparsers.add_parser("list", help="List registrations for an IP")
    list_parser.add_argument("--ip", required=True, help="Public IP to look up")
    list_parser.set_defaults(func=cmd_list)

    # Clear
    clear_parser = subparsers.add_parser(
        "clear", help="Delete every registration (maintenance only)"
    )
    clear_parser.add_argument(
        "--yes", action="store_true", help="Confirm the deletion",
    )
    clear_parser.set_defaults(func=cmd_clear)

    args = parser.parse_args(argv)
    configure_logging(level=settings.log_level)

    try:
        args.func(args)
    except StorageFault as exc:
        logger.error("%s", exc.message)
        sys.exit(1)


if __name__ == "__main__":
    main()
