"""``wren check`` — configuration validation command.

Resolves an import string to a wren Application and validates every
registry and route template, printing results to stdout.  Exits with
code 1 if the configuration is invalid.
"""

import argparse

from wren.cli._resolve import load_app


def run_check(args: argparse.Namespace) -> None:
    app = load_app(args.app)
    app.check()
