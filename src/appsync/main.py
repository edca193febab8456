#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from appsync.adapters.onelogin import JsonAppCodec
from appsync.app import apply_app, build_apps_service, load_app_file
from appsync.config import ConfigurationError, configure_logging
from appsync.domain.errors import AppSyncError, PartialSyncError
from appsync.domain.model import AppsQuery

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from appsync.domain.apps import AppsService
    from appsync.domain.model import App

def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise OneLogin apps and their rules")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    listing = subparsers.add_parser("list", help="List apps with their rules")
    listing.add_argument("--name", type=str, help="Filter by app name")
    listing.add_argument("--connector-id", type=int, help="Filter by connector id")
    listing.add_argument("--limit", type=int, help="Page size")
    listing.add_argument("--page", type=int, help="Page number")

    get = subparsers.add_parser("get", help="Show one app with its rules")
    get.add_argument("app_id", type=int)

    apply = subparsers.add_parser("apply", help="Create or converge an app from a JSON file")
    apply.add_argument("path", type=Path, help="Desired app document")
    apply.add_argument(
        "--app-id",
        type=int,
        help="Existing app to update (defaults to the document's id; create when absent)",
    )

    delete = subparsers.add_parser("delete", help="Delete an app")
    delete.add_argument("app_id", type=int)

    return parser.parse_args(list(argv))


def _emit(payload: object) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _run_command(args: argparse.Namespace, service: AppsService) -> None:
    codec = JsonAppCodec()
    if args.command == "list":
        query = AppsQuery(
            name=args.name,
            connector_id=args.connector_id,
            limit=args.limit,
            page=args.page,
        )
        _emit([codec.dump_app(app) for app in service.query(query)])
    elif args.command == "get":
        _emit(codec.dump_app(service.get_one(args.app_id)))
    elif args.command == "apply":
        desired: App = load_app_file(args.path, codec=codec)
        _emit(codec.dump_app(apply_app(service, desired, app_id=args.app_id)))
    elif args.command == "delete":
        service.destroy(args.app_id)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        args = _parse_args(argv if argv is not None else sys.argv[1:])
        configure_logging(level=logging.DEBUG if args.verbose else logging.INFO)
        service = build_apps_service()
    except (ValueError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    try:
        _run_command(args, service)
    except PartialSyncError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if exc.app is not None:
            print(f"Recovered state of app {exc.app.id}:", file=sys.stderr)
            _emit(JsonAppCodec().dump_app(exc.app))
        sys.exit(1)
    except (AppSyncError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        service.repository.close()


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
