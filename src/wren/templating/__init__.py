"""Templating — kida environment setup and view-helper binding."""

from wren.templating.integration import create_environment, render_string, render_template

__all__ = ["create_environment", "render_string", "render_template"]
