"""Route table — named route templates parsed at configuration time.

Templates are parsed once when the table is built, so a malformed
template fails at startup rather than on the first link that uses it.
"""

import re
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from wren.errors import ConfigurationError, RouteNotFoundError
from wren.routing.route import Literal, Node, OptionalGroup, Placeholder, RouteDefinition

# Greedy, so ":identifier" is one placeholder, never ":id" + "entifier"
PLACEHOLDER = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")

_DISPATCH_KEYS = ("route", "module", "controller", "action")


def parse_template(template: str) -> tuple[Node, ...]:
    """Parse a route template into literal, placeholder and group nodes.

    Examples::

        "/admin"                      -> (Literal("/admin"),)
        "/view/:slug"                 -> (Literal("/view/"), Placeholder("slug"))
        "/dashboard(/page/:page)?"    -> (Literal("/dashboard"),
                                          OptionalGroup((Literal("/page/"), Placeholder("page"))))

    Raises ``ConfigurationError`` for an unclosed ``(`` or a stray ``)?``.
    """
    stack: list[list[Node]] = [[]]
    text: list[str] = []

    def flush() -> None:
        if text:
            stack[-1].append(Literal("".join(text)))
            text.clear()

    i = 0
    while i < len(template):
        char = template[i]
        if char == "(":
            flush()
            stack.append([])
            i += 1
        elif template.startswith(")?", i):
            if len(stack) == 1:
                msg = f"Unmatched ')?' at position {i} in route template {template!r}"
                raise ConfigurationError(msg)
            flush()
            group = OptionalGroup(tuple(stack.pop()))
            stack[-1].append(group)
            i += 2
        elif char == ":" and (match := PLACEHOLDER.match(template, i)):
            flush()
            stack[-1].append(Placeholder(match.group(1)))
            i = match.end()
        else:
            text.append(char)
            i += 1

    if len(stack) != 1:
        msg = f"Unclosed optional group in route template {template!r}"
        raise ConfigurationError(msg)
    flush()
    return tuple(stack[0])


def parse_route(name: str, entry: Mapping[str, Any]) -> RouteDefinition:
    """Build a RouteDefinition from one entry of the routes configuration."""
    if not isinstance(entry, Mapping):
        msg = f"Route {name!r} must be a mapping, got {type(entry).__name__}"
        raise ConfigurationError(msg)
    template = entry.get("route")
    if not isinstance(template, str):
        msg = f"Route {name!r} is missing a 'route' template string"
        raise ConfigurationError(msg)
    return RouteDefinition(
        name=name,
        template=template,
        nodes=parse_template(template),
        module=entry.get("module"),
        controller=entry.get("controller"),
        action=entry.get("action"),
        options=MappingProxyType({k: v for k, v in entry.items() if k not in _DISPATCH_KEYS}),
    )


class RouteTable:
    """Immutable ``name -> RouteDefinition`` table.

    Usage::

        table = RouteTable.from_config({
            "blogIndexView": {"route": "/:category_slug/articles/:slug/index.html"},
        })
        table["blogIndexView"].placeholders  # ("category_slug", "slug")
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: list[RouteDefinition] | None = None) -> None:
        self._routes: dict[str, RouteDefinition] = {}
        for route in routes or ():
            if route.name in self._routes:
                msg = f"Duplicate route name: {route.name!r}"
                raise ConfigurationError(msg)
            self._routes[route.name] = route

    @classmethod
    def from_config(cls, routes: Mapping[str, Mapping[str, Any]]) -> "RouteTable":
        return cls([parse_route(name, entry) for name, entry in routes.items()])

    def get(self, name: str) -> RouteDefinition | None:
        """Look up a route by name. Returns ``None`` if not found."""
        return self._routes.get(name)

    def __getitem__(self, name: str) -> RouteDefinition:
        route = self._routes.get(name)
        if route is None:
            raise RouteNotFoundError(name)
        return route

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    def __iter__(self) -> Iterator[RouteDefinition]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)

    def names(self) -> list[str]:
        return list(self._routes)
