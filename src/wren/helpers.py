"""Framework view helpers.

View helpers are plain callables that templates reach as globals (see
``wren.templating``). The names registered here belong to the framework.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from wren.routing.reverser import UrlReverser
from wren.services.registry import Registry, compile_registry

if TYPE_CHECKING:
    from wren.services.extensions import ViewHelperManager


class UrlHelper:
    """``{{ url("blogIndexView", {"slug": post.slug}) }}``

    Renders an empty string for an unknown route, so the page shows a
    dead link instead of failing.
    """

    __slots__ = ("_urls",)

    def __init__(self, urls: UrlReverser) -> None:
        self._urls = urls

    def __call__(
        self,
        name: str,
        params: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> str:
        return self._urls.from_route(name, params, options) or ""


class HeadTitle:
    """Collects ``<title>`` parts over one request.

    Templates build the title as they render and print it in the layout::

        {{ head_title("Dashboard") }}
        {{ head_title("Admin", "prepend") }}
        <title>{{ head_title() }}</title>   -> "Admin | Dashboard"

    Calls that change the title render as an empty string.
    """

    MODES = ("set", "append", "prepend")

    def __init__(self, separator: str = " | ", default: str = "") -> None:
        self.separator = separator
        self.default = default
        self.parts: list[str] = []

    def __call__(self, title: str | None = None, mode: str = "set") -> str:
        if title is None:
            return self.render()
        if mode not in self.MODES:
            msg = f"head_title mode must be one of {', '.join(self.MODES)}, got {mode!r}"
            raise ValueError(msg)
        if mode == "set":
            self.parts = [title]
        elif mode == "append":
            self.parts.append(title)
        else:
            self.parts.insert(0, title)
        return ""

    def render(self) -> str:
        if not self.parts:
            return self.default
        return self.separator.join(self.parts)

    def __str__(self) -> str:
        return self.render()


def url_helper_factory(helpers: "ViewHelperManager") -> UrlHelper:
    return UrlHelper(helpers.services.get("UrlReverser"))


def head_title_factory(helpers: "ViewHelperManager") -> HeadTitle:
    config = helpers.services.config
    return HeadTitle(separator=config.title_separator, default=config.default_title)


FRAMEWORK_HELPERS: Registry = compile_registry(
    {"factories": {"url": url_helper_factory, "head_title": head_title_factory}},
    "view_helpers",
)
