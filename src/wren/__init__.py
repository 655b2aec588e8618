"""Wren — service locators and route reversal for MVC applications.

Basic usage::

    from wren import Application

    app = Application({
        "service_manager": {"factories": {"PostService": post_service_factory}},
        "router": {"routes": {"blogIndexView": {"route": "/articles/:slug"}}},
    })

    with app.request_scope() as services:
        posts = services.get("PostService")
        urls = services.get("UrlReverser")
        urls.from_route("blogIndexView", {"slug": "hello"})  # "/articles/hello"
"""

__version__ = "0.1.0"
__all__ = [
    "AppConfig",
    "Application",
    "ApplicationContainer",
    "ConfigurationConflictError",
    "ConfigurationError",
    "ManagerConfig",
    "NamespacedExtensionManager",
    "PluginManager",
    "ResolutionCycleError",
    "RouteNotFoundError",
    "RouteTable",
    "ServiceManager",
    "ServiceNotFoundError",
    "UrlReverser",
    "ViewHelperManager",
    "WrenError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "Application":
        from wren.app import Application

        return Application

    if name in ("AppConfig", "ManagerConfig"):
        from wren import config as _config

        return getattr(_config, name)

    if name == "ApplicationContainer":
        from wren.container import ApplicationContainer

        return ApplicationContainer

    if name == "ServiceManager":
        from wren.services.manager import ServiceManager

        return ServiceManager

    if name in ("NamespacedExtensionManager", "PluginManager", "ViewHelperManager"):
        from wren.services import extensions as _ext

        return getattr(_ext, name)

    if name in ("RouteTable", "UrlReverser"):
        from wren import routing as _routing

        return getattr(_routing, name)

    if name in (
        "ConfigurationConflictError",
        "ConfigurationError",
        "ResolutionCycleError",
        "RouteNotFoundError",
        "ServiceNotFoundError",
        "WrenError",
    ):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
