#!/usr/bin/env python3
"""
Steam Update Manager command line.

Usage:
    python -m steam_update_manager list [--library PATH]
    python -m steam_update_manager set {0,1} --library PATH

Policies:
    0 - Always keep this game updated
    1 - Only update this game when I launch it
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .models import POLICY_LABELS, policy_from_label
from .service import UpdateManagerService


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='[%(asctime)s] %(levelname)s - %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )


def _policy_arg(value: str) -> str:
    token = policy_from_label(value)
    if token is None:
        raise argparse.ArgumentTypeError(
            f"invalid policy {value!r} (choose from {', '.join(POLICY_LABELS)})"
        )
    return token


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="steam_update_manager",
        description="Change the auto-update behavior of installed Steam games",
    )
    parser.add_argument('--steam-path', help='Steam install directory (skips auto-detection)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    list_parser = subparsers.add_parser('list', help='List libraries and their games')
    list_parser.add_argument('--library', help='Only show this library root')

    set_parser = subparsers.add_parser('set', help='Set the auto-update policy for a library')
    set_parser.add_argument('policy', type=_policy_arg,
                            help='0 = always keep updated, 1 = only update on launch')
    set_parser.add_argument('--library', required=True, help='Library root to update')

    return parser


def _print_library(library) -> None:
    print(f"{library.root_path} ({len(library.titles)} games)")
    for title in library.titles:
        label = POLICY_LABELS.get(title.auto_update_policy, "Unknown")
        print(f"  {title.name}\t{title.auto_update_policy} - {label}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    candidates = [args.steam_path] if args.steam_path else None
    service = UpdateManagerService(candidates)
    libraries = service.discover_libraries()

    if not libraries:
        print("No Steam libraries found")
        return 1

    if args.library and service.get_library(args.library) is None:
        print(f"Unknown library: {args.library}")
        print("Available libraries:")
        for path in service.library_paths():
            print(f"  {path}")
        return 1

    if args.command == 'list':
        for library in libraries:
            if args.library and library.root_path != args.library:
                continue
            _print_library(library)
        return 0

    result = asyncio.run(service.update_library(args.library, args.policy, listener=print))
    if not result['success']:
        print(f"Error: {result['error']}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
