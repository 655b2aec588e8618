"""Route definition and parsed template node frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeAlias


@dataclass(frozen=True, slots=True)
class Literal:
    """Plain path text, copied to the output as is."""

    text: str


@dataclass(frozen=True, slots=True)
class Placeholder:
    """A required parameter: ``:slug`` -> Placeholder("slug")."""

    name: str


@dataclass(frozen=True, slots=True)
class OptionalGroup:
    """A ``( ... )?`` span, rendered only when its parameters are supplied.

    Only the group's own placeholders decide whether it is kept. Nested
    groups decide for themselves::

        "/archive(/:year(/:month)?)?"
    """

    nodes: tuple["Node", ...]

    @property
    def placeholders(self) -> tuple[str, ...]:
        return tuple(n.name for n in self.nodes if isinstance(n, Placeholder))


Node: TypeAlias = Literal | Placeholder | OptionalGroup


@dataclass(frozen=True, slots=True)
class RouteDefinition:
    """A frozen named route.

    Only ``template`` takes part in URL reversal. ``module``,
    ``controller``, ``action`` and ``options`` are kept for the dispatch
    layer and for ``wren routes``.
    """

    name: str
    template: str
    nodes: tuple[Node, ...]
    module: str | None = None
    controller: str | None = None
    action: str | None = None
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def placeholders(self) -> tuple[str, ...]:
        """Every parameter name in the template, in order of appearance."""
        names: list[str] = []
        stack = list(reversed(self.nodes))
        while stack:
            node = stack.pop()
            if isinstance(node, Placeholder):
                names.append(node.name)
            elif isinstance(node, OptionalGroup):
                stack.extend(reversed(node.nodes))
        return tuple(names)

    @property
    def target(self) -> str:
        """``module/controller/action`` for display."""
        return "/".join(p for p in (self.module, self.controller, self.action) if p)
