"""Framework controller plugins.

These names belong to the framework; an application registering a
controller plugin under one of them fails at bootstrap with
``ConfigurationConflictError``.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from wren.routing.reverser import UrlReverser
from wren.services.registry import Registry, compile_registry

if TYPE_CHECKING:
    from wren.services.extensions import PluginManager


class UrlPlugin:
    """Builds links from inside a controller action.

    Usage::

        self.plugin("url").from_route("adminIndexView", {"slug": post.slug})
    """

    __slots__ = ("_urls",)

    def __init__(self, urls: UrlReverser) -> None:
        self._urls = urls

    def from_route(
        self,
        name: str,
        params: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Return the path for *name*, or ``None`` for an unknown route."""
        return self._urls.from_route(name, params, options)


def url_plugin_factory(plugins: "PluginManager") -> UrlPlugin:
    return UrlPlugin(plugins.services.get("UrlReverser"))


FRAMEWORK_PLUGINS: Registry = compile_registry(
    {"factories": {"url": url_plugin_factory}},
    "controller_plugins",
)
