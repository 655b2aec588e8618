"""Wren CLI — route listing, URL reversal, and configuration checks.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren — service locators and route reversal for MVC applications.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wren routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List named routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    # -- wren url ---------------------------------------------------------
    url_parser = subparsers.add_parser("url", help="Reverse a named route into a path")
    url_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    url_parser.add_argument("route", help="Route name")
    url_parser.add_argument(
        "params",
        nargs="*",
        metavar="key=value",
        help="Route parameters",
    )

    # -- wren check -------------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate service and route configuration")
    check_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from wren.cli._routes import run_routes

        run_routes(args)
    elif args.command == "url":
        from wren.cli._url import run_url

        run_url(args)
    elif args.command == "check":
        from wren.cli._check import run_check

        run_check(args)
