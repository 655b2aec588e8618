"""Service locator — lazy, request-scoped resolution of named services.

A ``ServiceManager`` resolves a name against a compiled ``Registry``:
factories are called with the manager itself, invokables with no
arguments, and the result is cached for the rest of the scope. One
manager corresponds to one unit of work (a request); a new manager
starts with an empty cache.

Thread safety:
    The instance cache belongs to one scope and is never shared across
    concurrent units of work, so it carries no lock. The registry and
    the container handed in are shared and immutable or self-locking.
"""

import logging
from typing import Any

from wren.config import AppConfig
from wren.container import ApplicationContainer
from wren.errors import ResolutionCycleError, ServiceNotFoundError
from wren.services.registry import EntryKind, Registry, ServiceEntry

logger = logging.getLogger("wren.services")


class Locator:
    """Resolution algorithm shared by the service and extension managers."""

    namespace = "service_manager"

    def __init__(self, registry: Registry) -> None:
        self._registry = registry
        self._instances: dict[str, Any] = {}
        self._resolving: list[str] = []

    @property
    def registry(self) -> Registry:
        return self._registry

    def get(self, name: str) -> Any:
        """Return the instance registered under *name*.

        Raises ``ServiceNotFoundError`` if the name is unknown and
        ``ResolutionCycleError`` if a factory asks for a name that is
        still being built.
        """
        if name in self._instances:
            return self._instances[name]

        entry = self._registry.get(name)
        if entry is None:
            raise ServiceNotFoundError(name, self.namespace)

        if name in self._resolving:
            start = self._resolving.index(name)
            raise ResolutionCycleError([*self._resolving[start:], name])

        self._resolving.append(name)
        try:
            instance = self._create(entry)
        finally:
            self._resolving.pop()

        if entry.shared:
            self._instances[name] = instance
        logger.debug(
            "%s: created %r via %s%s",
            self.namespace,
            name,
            entry.kind,
            "" if entry.shared else " (not cached)",
        )
        return instance

    resolve = get

    def _create(self, entry: ServiceEntry) -> Any:
        try:
            if entry.kind is EntryKind.FACTORY:
                return entry.target(self)
            return entry.target()
        except Exception as exc:
            exc.add_note(f"while creating {self.namespace} entry {entry.name!r}")
            raise

    def has(self, name: str) -> bool:
        return name in self._registry

    def available(self) -> list[str]:
        """Return every resolvable name, sorted."""
        return self._registry.names()

    def clear(self, name: str | None = None) -> "Locator":
        """Drop one cached instance, or all of them."""
        if name is None:
            self._instances.clear()
        else:
            self._instances.pop(name, None)
        return self

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)


class ServiceManager(Locator):
    """Request-scoped service locator.

    Usage::

        services = ServiceManager(registry, config=config, container=container)
        posts = services.get("PostService")
        assert services.get("PostService") is posts

    *config* and *container* are the application-wide objects the
    framework factories read from; a manager built without them gets
    defaults, which is enough for standalone use and tests.
    """

    def __init__(
        self,
        registry: Registry,
        *,
        config: AppConfig | None = None,
        container: ApplicationContainer | None = None,
    ) -> None:
        super().__init__(registry)
        self.config = config if config is not None else AppConfig()
        self.container = container if container is not None else ApplicationContainer()

    def __repr__(self) -> str:
        return f"<ServiceManager services={len(self._registry)} cached={len(self._instances)}>"
