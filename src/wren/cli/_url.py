"""``wren url`` — reverse a named route from the command line.

Usage::

    wren url myapp:app blogIndexView category_slug=news slug=hello
"""

import argparse
import sys

from wren.cli._resolve import load_app
from wren.errors import ConfigurationError


def parse_params(pairs: list[str]) -> dict[str, str]:
    """Turn ``["key=value", ...]`` into a dict. Values may be empty."""
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"Expected key=value, got {pair!r}"
            raise ValueError(msg)
        params[key] = value
    return params


def run_url(args: argparse.Namespace) -> None:
    try:
        params = parse_params(args.params)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    app = load_app(args.app)
    try:
        path = app.urls.from_route(args.route, params)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if path is None:
        print(f"Error: route {args.route!r} not found", file=sys.stderr)
        raise SystemExit(1)
    print(path)
