"""Kida environment setup and view-helper binding.

The environment is created once per application and shared by every
request. View helpers hold request state (``head_title`` collects the
title of one page), so they are passed in the render context of each
call instead of being registered as environment globals.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from kida import Environment, FileSystemLoader

from wren.config import AppConfig
from wren.services.extensions import ViewHelperManager


def create_environment(config: AppConfig, template_dir: str | Path | None = None) -> Environment:
    """Create a kida Environment for the application.

    Without *template_dir* only ``render_string`` is usable.
    """
    if template_dir is None:
        return Environment(autoescape=True)
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=True,
        auto_reload=config.debug,
    )


def _context(helpers: ViewHelperManager, context: Mapping[str, Any] | None) -> dict[str, Any]:
    # Template variables win over helper names
    return {**helpers.as_globals(), **(context or {})}


def render_template(
    env: Environment,
    helpers: ViewHelperManager,
    name: str,
    context: Mapping[str, Any] | None = None,
) -> str:
    """Render a named template with the request's view helpers in scope."""
    template = env.get_template(name)
    return template.render(_context(helpers, context))


def render_string(
    env: Environment,
    helpers: ViewHelperManager,
    source: str,
    context: Mapping[str, Any] | None = None,
) -> str:
    """Render template *source* with the request's view helpers in scope."""
    template = env.from_string(source)
    return template.render(_context(helpers, context))
