"""Service registry — compiled name table for the locators.

Mirrors the ``Route`` + ``RouteTable`` pattern from ``wren.routing``:
``ServiceEntry`` is the frozen definition, ``Registry`` is the compiled
lookup table. Registries are compiled and validated at startup so a bad
entry fails during bootstrap, not on the first request that needs it.

Free-threading safety:
    - ServiceEntry is a frozen dataclass (immutable)
    - Registry._entries is built once and never mutated
"""

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from wren.config import ManagerConfig
from wren.errors import ConfigurationConflictError, ConfigurationError


class EntryKind(StrEnum):
    INVOKABLE = "invokable"
    FACTORY = "factory"


@dataclass(frozen=True, slots=True)
class ServiceEntry:
    """A frozen registry entry.

    Invokables are called with no arguments. Factories are called with
    the locator resolving them, so they can pull their own dependencies.
    """

    name: str
    kind: EntryKind
    target: Callable[..., Any]
    shared: bool = True


class Registry:
    """Compiled ``name -> ServiceEntry`` table. Immutable once built."""

    __slots__ = ("_entries",)

    def __init__(self, entries: list[ServiceEntry] | None = None) -> None:
        self._entries: dict[str, ServiceEntry] = {e.name: e for e in entries or ()}

    def get(self, name: str) -> ServiceEntry | None:
        """Look up an entry by name. Returns ``None`` if not found."""
        return self._entries.get(name)

    def names(self) -> list[str]:
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[ServiceEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Registry):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"<Registry {self.names()!r}>"


def compile_registry(config: ManagerConfig | Mapping[str, Any], where: str = "manager") -> Registry:
    """Compile a manager configuration into a frozen Registry.

    Accepts a ``ManagerConfig`` or its mapping form. Every target must be
    callable and a name may be declared once, either as an invokable or
    as a factory.
    """
    if not isinstance(config, ManagerConfig):
        config = ManagerConfig.from_mapping(config, where)

    entries: list[ServiceEntry] = []
    duplicates = sorted(set(config.invokables) & set(config.factories))
    if duplicates:
        msg = f"{where}: names declared as both invokable and factory: {', '.join(duplicates)}"
        raise ConfigurationError(msg)

    for kind, table in (
        (EntryKind.INVOKABLE, config.invokables),
        (EntryKind.FACTORY, config.factories),
    ):
        for name, target in table.items():
            if not callable(target):
                msg = f"{where}: {kind} {name!r} must be callable, got {type(target).__name__}"
                raise ConfigurationError(msg)
            entries.append(
                ServiceEntry(
                    name=name,
                    kind=kind,
                    target=target,
                    shared=bool(config.shared.get(name, True)),
                )
            )

    unknown = sorted(set(config.shared) - set(config.invokables) - set(config.factories))
    if unknown:
        msg = f"{where}: 'shared' names unknown services: {', '.join(unknown)}"
        raise ConfigurationError(msg)

    return Registry(entries)


def merge_registries(namespace: str, framework: Registry, application: Registry) -> Registry:
    """Union a framework registry with an application registry.

    The two must be disjoint. Any application name that the framework
    already owns raises ``ConfigurationConflictError`` listing all of
    them. Same inputs always give the same result, so a race between
    two first callers is harmless.
    """
    conflicts = {entry.name for entry in application if entry.name in framework}
    if conflicts:
        raise ConfigurationConflictError(namespace, conflicts)
    return Registry([*framework, *application])
