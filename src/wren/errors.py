"""Wren exception hierarchy.

Shared across the service managers, the route table, and the
application bootstrap so every module raises and catches the same types.
"""

from collections.abc import Iterable


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when application configuration is invalid.

    Typically raised during ``Application.freeze()`` at startup.
    """


class ConfigurationConflictError(ConfigurationError):
    """An application registry defines names owned by the framework.

    Lists every conflicting key, not just the first one found.
    """

    def __init__(self, namespace: str, conflicts: Iterable[str]) -> None:
        self.namespace = namespace
        self.conflicts: tuple[str, ...] = tuple(sorted(conflicts))
        keys = ", ".join(self.conflicts)
        super().__init__(
            f"Application {namespace} cannot override framework {namespace}. "
            f"The following keys are already in use by the framework: {keys}. "
            f"Choose different names for the application entries."
        )


class ServiceNotFoundError(WrenError, LookupError):
    """The requested name is not registered with the locator."""

    def __init__(self, name: str, namespace: str = "service_manager") -> None:
        self.name = name
        self.namespace = namespace
        super().__init__(f"Service {name!r} not found in {namespace}")


class ResolutionCycleError(WrenError):
    """A factory requested, directly or transitively, its own name."""

    def __init__(self, chain: Iterable[str]) -> None:
        self.chain: tuple[str, ...] = tuple(chain)
        super().__init__(f"Circular service resolution: {' -> '.join(self.chain)}")


class RouteNotFoundError(WrenError, LookupError):
    """No route is registered under the given name.

    ``UrlReverser.from_route`` turns this into a ``None`` return so a
    page can render a dead link instead of failing.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Route {name!r} not found in routes configuration")
