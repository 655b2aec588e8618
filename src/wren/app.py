"""The wren application — bootstrap object and request-scope factory."""

import logging
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from wren.config import AppConfig
from wren.container import ApplicationContainer
from wren.errors import ConfigurationError
from wren.routing.reverser import UrlReverser
from wren.routing.table import RouteTable
from wren.services.extensions import PluginManager, ViewHelperManager
from wren.services.manager import ServiceManager
from wren.services.registry import Registry, compile_registry, merge_registries

logger = logging.getLogger("wren.app")


def route_table_factory(services: ServiceManager) -> RouteTable:
    """Parse the configured routes once per process."""
    return services.container.memoize(
        "router",
        "table",
        lambda: RouteTable.from_config(services.config.routes),
    )


def url_reverser_factory(services: ServiceManager) -> UrlReverser:
    return UrlReverser(services.get("RouteTable"))


FRAMEWORK_SERVICES: Registry = compile_registry(
    {
        "factories": {
            "Config": lambda services: services.config,
            "ServiceManager": lambda services: services,
            "RouteTable": route_table_factory,
            "UrlReverser": url_reverser_factory,
            "PluginManager": PluginManager,
            "ViewHelperManager": ViewHelperManager,
        },
    },
    "service_manager",
)


class Application:
    """The wren application.

    Built once at process start. Owns the configuration and the
    ``ApplicationContainer``; every unit of work gets its own
    ``ServiceManager`` from ``create_service_manager()``::

        app = Application({"router": {"routes": ROUTES}, "service_manager": {...}})

        with app.request_scope() as services:
            helpers = services.get("ViewHelperManager")

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles registries and routes, even when several workers
        hit their first request concurrently.
    """

    __slots__ = ("_container", "_freeze_lock", "_frozen", "_service_registry", "config")

    def __init__(
        self,
        config: AppConfig | Mapping[str, Any] | None = None,
        *,
        container: ApplicationContainer | None = None,
    ) -> None:
        if config is None:
            config = AppConfig()
        elif not isinstance(config, AppConfig):
            config = AppConfig.from_mapping(config)
        self.config: AppConfig = config
        self._container = container if container is not None else ApplicationContainer()
        self._frozen = False
        self._freeze_lock = threading.Lock()
        self._service_registry: Registry | None = None

    @property
    def container(self) -> ApplicationContainer:
        return self._container

    @property
    def routes(self) -> RouteTable:
        return self.create_service_manager().get("RouteTable")

    @property
    def urls(self) -> UrlReverser:
        return self.create_service_manager().get("UrlReverser")

    def create_service_manager(self) -> ServiceManager:
        """Return a fresh request-scoped ServiceManager."""
        self.freeze()
        assert self._service_registry is not None
        return ServiceManager(
            self._service_registry,
            config=self.config,
            container=self._container,
        )

    @contextmanager
    def request_scope(self) -> Iterator[ServiceManager]:
        """Yield a ServiceManager for one unit of work, dropping its cache after."""
        services = self.create_service_manager()
        try:
            yield services
        finally:
            services.clear()

    def freeze(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the service registry and parse routes.

        MUST only be called while holding _freeze_lock.
        """
        registry = self._container.memoize(
            "service_manager",
            "registry",
            lambda: merge_registries(
                "service_manager",
                FRAMEWORK_SERVICES,
                compile_registry(self.config.service_manager, "service_manager"),
            ),
        )

        # Parse routes now so a malformed template fails at startup
        services = ServiceManager(registry, config=self.config, container=self._container)
        routes = services.get("RouteTable")

        self._service_registry = registry
        self._frozen = True
        logger.debug("Application frozen: %d services, %d routes", len(registry), len(routes))

    def validate(self) -> None:
        """Compile and merge every registry, raising on the first problem.

        Raises ``ConfigurationError`` (``ConfigurationConflictError`` for
        name collisions) so bootstrap can abort.
        """
        self.freeze()
        services = self.create_service_manager()
        services.get("PluginManager")
        services.get("ViewHelperManager")

    def check(self) -> None:
        """Validate configuration and print a summary.

        Raises ``SystemExit(1)`` if the configuration is invalid.
        """
        try:
            self.validate()
        except ConfigurationError as exc:
            print(f"Configuration error: {exc}")
            raise SystemExit(1) from exc

        services = self.create_service_manager()
        plugins = services.get("PluginManager")
        helpers = services.get("ViewHelperManager")
        print(f"services:           {len(services.available())}")
        print(f"controller plugins: {len(plugins.available())}")
        print(f"view helpers:       {len(helpers.available())}")
        print(f"routes:             {len(services.get('RouteTable'))}")
        print("OK")
