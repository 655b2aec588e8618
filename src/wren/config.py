"""Application configuration.

AppConfig and ManagerConfig are frozen dataclasses — immutable after
creation. They are usually built from the mapping-shaped configuration
an application ships::

    config = AppConfig.from_mapping({
        "service_manager": {"factories": {"PostService": post_service_factory}},
        "view_helpers": {"invokables": {"truncate": Truncate}},
        "router": {"routes": {"home": {"route": "/"}}},
    })
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from wren.errors import ConfigurationError

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def _frozen(value: Mapping[str, Any] | None, where: str) -> Mapping[str, Any]:
    if value is None:
        return _EMPTY
    if not isinstance(value, Mapping):
        msg = f"{where} must be a mapping, got {type(value).__name__}"
        raise ConfigurationError(msg)
    return MappingProxyType(dict(value))


@dataclass(frozen=True, slots=True)
class ManagerConfig:
    """Invokables, factories and sharing flags for one locator.

    ``shared`` maps a service name to ``False`` when every lookup must
    build a new instance instead of reusing the scope's cached one.
    """

    invokables: Mapping[str, Callable[[], Any]] = field(default_factory=lambda: _EMPTY)
    factories: Mapping[str, Callable[[Any], Any]] = field(default_factory=lambda: _EMPTY)
    shared: Mapping[str, bool] = field(default_factory=lambda: _EMPTY)

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any] | None, where: str = "manager"
    ) -> "ManagerConfig":
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            msg = f"{where} configuration must be a mapping, got {type(data).__name__}"
            raise ConfigurationError(msg)
        unknown = set(data) - {"invokables", "factories", "shared"}
        if unknown:
            msg = f"Unknown keys in {where} configuration: {', '.join(sorted(unknown))}"
            raise ConfigurationError(msg)
        return cls(
            invokables=_frozen(data.get("invokables"), f"{where}.invokables"),
            factories=_frozen(data.get("factories"), f"{where}.factories"),
            shared=_frozen(data.get("shared"), f"{where}.shared"),
        )


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have defaults; override what you need::

        config = AppConfig(debug=True, routes={"home": {"route": "/"}})
    """

    debug: bool = False

    # Locators
    service_manager: ManagerConfig = field(default_factory=ManagerConfig)
    controller_plugins: ManagerConfig = field(default_factory=ManagerConfig)
    view_helpers: ManagerConfig = field(default_factory=ManagerConfig)

    # Routing: only "route" takes part in reversal
    routes: Mapping[str, Mapping[str, Any]] = field(default_factory=lambda: _EMPTY)

    # head_title helper
    title_separator: str = " | "
    default_title: str = ""

    # Anything else the application keeps in its config (db, session, ...)
    extra: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AppConfig":
        """Build an AppConfig from the application's configuration mapping.

        Top-level keys other than the ones wren consumes are kept,
        read-only, in ``extra``.
        """
        known = {
            "debug",
            "service_manager",
            "controller_plugins",
            "view_helpers",
            "router",
            "title_separator",
            "default_title",
        }
        router = data.get("router") or {}
        if not isinstance(router, Mapping):
            msg = f"router configuration must be a mapping, got {type(router).__name__}"
            raise ConfigurationError(msg)
        return cls(
            debug=bool(data.get("debug", False)),
            service_manager=ManagerConfig.from_mapping(
                data.get("service_manager"), "service_manager"
            ),
            controller_plugins=ManagerConfig.from_mapping(
                data.get("controller_plugins"), "controller_plugins"
            ),
            view_helpers=ManagerConfig.from_mapping(data.get("view_helpers"), "view_helpers"),
            routes=_frozen(router.get("routes"), "router.routes"),
            title_separator=data.get("title_separator", " | "),
            default_title=data.get("default_title", ""),
            extra=MappingProxyType({k: v for k, v in data.items() if k not in known}),
        )
