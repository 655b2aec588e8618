"""Locating the Application a ``wren`` command works on.

Every subcommand takes an ``APP`` argument such as ``blog.bootstrap:app``.
"""

import importlib
import sys

from wren.app import Application


def resolve_app(import_string: str) -> Application:
    """Import ``module[:name]`` and return the Application it names.

    *name* defaults to ``app``. A callable that is not itself an
    Application is treated as a factory and called with no arguments.
    Import and lookup errors propagate; anything that does not end up
    as an Application raises ``TypeError``.
    """
    module_path, _, attr_name = import_string.partition(":")
    target = getattr(importlib.import_module(module_path), attr_name or "app")

    if isinstance(target, Application):
        return target
    if callable(target):
        try:
            target = target()
        except Exception as exc:
            msg = f"Calling {import_string!r} failed: {exc}"
            raise TypeError(msg) from exc
        if isinstance(target, Application):
            return target

    msg = f"{import_string!r} resolved to {type(target).__name__}, not a wren.Application instance"
    raise TypeError(msg)


def load_app(import_string: str) -> Application:
    """``resolve_app`` for commands: prints the error and exits with 1."""
    try:
        return resolve_app(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
