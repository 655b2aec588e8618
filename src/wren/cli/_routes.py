"""``wren routes`` — list named routes.

Prints every route with its name, template, and dispatch target.
"""

import argparse
import sys

from wren.cli._resolve import load_app
from wren.errors import ConfigurationError


def run_routes(args: argparse.Namespace) -> None:
    app = load_app(args.app)
    try:
        table = app.routes
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = [(route.name, route.template, route.target) for route in table]
    if not rows:
        print("No routes registered.")
        return

    max_name = max(4, *(len(r[0]) for r in rows))  # "NAME" header
    max_template = max(5, *(len(r[1]) for r in rows))  # "ROUTE" header

    fmt = f"{{:<{max_name}}}  {{:<{max_template}}}  {{}}"
    print(fmt.format("NAME", "ROUTE", "TARGET"))
    sep_len = max_name + max_template + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for name, template, target in rows:
        print(fmt.format(name, template, target))
