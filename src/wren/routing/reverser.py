"""URL reversal — named route + parameters -> concrete path.

Rendering rules:

- A placeholder whose name is a key of *params* becomes ``str(value)``.
  Values are opaque text and are never interpreted as template syntax.
- An optional group missing any of its own placeholders is removed
  whole, separator included. Removal never leaves ``//`` or a trailing
  ``/`` behind (a bare ``/`` root is kept). Only the separator right
  before the group is cleaned up, never one next to an empty value.
  A path left empty renders as ``/``.
- A kept group loses only its ``(`` and ``)?``.
- An empty-string value counts as supplied; ``None`` does not.
- A required placeholder outside any group with no value is left as
  ``:name`` and logged.
"""

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, urlencode

from wren.errors import RouteNotFoundError
from wren.routing.route import Literal, Node, OptionalGroup, Placeholder
from wren.routing.table import RouteTable

logger = logging.getLogger("wren.routing")

# Marks where an optional group was removed
_DROPPED = None


def _emit(
    nodes: tuple[Node, ...],
    params: Mapping[str, Any],
    pieces: list[tuple[str, bool] | None],
    missing: list[str],
) -> None:
    for node in nodes:
        if isinstance(node, Literal):
            pieces.append((node.text, True))
        elif isinstance(node, Placeholder):
            value = params.get(node.name)
            if value is None:
                missing.append(node.name)
                pieces.append((f":{node.name}", True))
            else:
                pieces.append((str(value), False))
        elif all(params.get(name) is not None for name in node.placeholders):
            _emit(node.nodes, params, pieces, missing)
        else:
            pieces.append(_DROPPED)


def render(nodes: tuple[Node, ...], params: Mapping[str, Any]) -> tuple[str, list[str]]:
    """Render parsed template nodes.

    Returns the path and the required placeholders left unresolved.
    """
    pieces: list[tuple[str, bool] | None] = []
    missing: list[str] = []
    _emit(nodes, params, pieces, missing)

    path = ""
    # Set while the last emitted piece is literal text ending in "/"
    literal_slash = False
    # Set when a group was removed right after such a separator
    dangling = False
    for piece in pieces:
        if piece is _DROPPED:
            dangling = dangling or literal_slash
            continue
        text, literal = piece
        if dangling and literal and text.startswith("/"):
            text = text[1:]
        dangling = False
        literal_slash = literal and (text.endswith("/") or (not text and literal_slash))
        path += text

    if dangling and len(path) > 1:
        path = path[:-1]
    return path or "/", missing


class UrlReverser:
    """Builds concrete paths from named routes.

    Usage::

        urls = UrlReverser(table)
        urls.from_route("blogIndexIndex", {"page": 2})  # "/page/2/index.html"
        urls.from_route("blogIndexIndex")               # "/"
        urls.from_route("nope")                         # None
    """

    __slots__ = ("_table",)

    def __init__(self, table: RouteTable) -> None:
        self._table = table

    @property
    def table(self) -> RouteTable:
        return self._table

    def url_for(
        self,
        name: str,
        params: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> str:
        """Reverse *name* into a path.

        Raises ``RouteNotFoundError`` if no route has that name.

        *options* may carry ``query`` (a mapping, urlencoded after ``?``)
        and ``fragment`` (appended after ``#``).
        """
        route = self._table[name]
        path, missing = render(route.nodes, params or {})
        if missing:
            logger.warning(
                "Route %r rendered without required parameter(s): %s",
                name,
                ", ".join(missing),
            )

        options = options or {}
        query = options.get("query")
        if query:
            path = f"{path}?{urlencode(query, doseq=True)}"
        fragment = options.get("fragment")
        if fragment:
            path = f"{path}#{quote(str(fragment), safe='')}"
        return path

    def from_route(
        self,
        name: str,
        params: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Reverse *name* into a path, or ``None`` if the route is unknown."""
        try:
            return self.url_for(name, params, options)
        except RouteNotFoundError:
            logger.warning("Route %r not found in routes configuration", name)
            return None
