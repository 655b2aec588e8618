"""Namespaced extension managers — controller plugins and view helpers.

Each manager pairs a fixed, trusted framework registry with the
application registry from config. The two are merged once per process
and namespace: the merge is validated (no application name may shadow a
framework name) and the result is stored in the ``ApplicationContainer``
so the many managers built during the process lifetime, one per
request, reuse it without validating again.

Usage::

    helpers = ViewHelperManager(services)
    url = helpers.get("url")
    url("blogIndexView", {"slug": "hello"})
"""

import logging
from typing import Any, ClassVar

from wren.config import ManagerConfig
from wren.helpers import FRAMEWORK_HELPERS
from wren.plugins import FRAMEWORK_PLUGINS
from wren.services.manager import Locator, ServiceManager
from wren.services.registry import Registry, compile_registry, merge_registries

logger = logging.getLogger("wren.services")

REGISTRY_KEY = "registry"


def merged_registry(
    services: ServiceManager,
    namespace: str,
    framework: Registry,
    application: ManagerConfig,
) -> Registry:
    """Return the validated framework + application registry for *namespace*.

    Computed on first use and memoized in the services' container.
    Raises ``ConfigurationConflictError`` on overlapping names; nothing
    is stored in that case.
    """

    def compute() -> Registry:
        merged = merge_registries(namespace, framework, compile_registry(application, namespace))
        logger.debug("%s: stored merged registry (%d entries)", namespace, len(merged))
        return merged

    return services.container.memoize(namespace, REGISTRY_KEY, compute)


class NamespacedExtensionManager(Locator):
    """A locator over the merged framework + application registry.

    Subclasses set ``namespace`` (also the ``AppConfig`` field holding the
    application registry) and ``framework``. Factories receive the
    extension manager; the owning ``ServiceManager`` is available as
    ``manager.services``.
    """

    namespace: ClassVar[str]
    framework: ClassVar[Registry] = Registry()

    def __init__(self, services: ServiceManager) -> None:
        self.services = services
        application: ManagerConfig = getattr(services.config, self.namespace)
        super().__init__(merged_registry(services, self.namespace, self.framework, application))

    def is_framework(self, name: str) -> bool:
        return name in self.framework

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.available()!r}>"


class PluginManager(NamespacedExtensionManager):
    """Controller plugins: ``plugins.get("url").from_route(...)``."""

    namespace = "controller_plugins"
    framework = FRAMEWORK_PLUGINS


class ViewHelperManager(NamespacedExtensionManager):
    """View helpers, exposed to templates as globals."""

    namespace = "view_helpers"
    framework = FRAMEWORK_HELPERS

    def as_globals(self) -> dict[str, Any]:
        """Resolve every helper and return them keyed by name."""
        return {name: self.get(name) for name in self.available()}
