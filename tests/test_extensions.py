"""Tests for wren.services.extensions — plugin and view-helper managers."""

import pytest

from wren.config import AppConfig, ManagerConfig
from wren.container import ApplicationContainer
from wren.errors import ConfigurationConflictError, ServiceNotFoundError
from wren.helpers import HeadTitle, UrlHelper
from wren.plugins import UrlPlugin
from wren.services.extensions import (
    REGISTRY_KEY,
    NamespacedExtensionManager,
    PluginManager,
    ViewHelperManager,
    merged_registry,
)
from wren.services.manager import ServiceManager
from wren.services.registry import Registry, compile_registry

ROUTES = {
    "adminIndexView": {"route": "/admin/dashboard/view/:slug"},
}


class Markdown:
    pass


class OpaqueId:
    pass


def _services(container: ApplicationContainer | None = None, **config: object) -> ServiceManager:
    """A ServiceManager wired like Application does, without the Application."""
    from wren.app import FRAMEWORK_SERVICES

    return ServiceManager(
        FRAMEWORK_SERVICES,
        config=AppConfig(routes=ROUTES, **config),  # type: ignore[arg-type]
        container=container or ApplicationContainer(),
    )


class TestPluginManager:
    def test_framework_url_plugin(self) -> None:
        plugins = PluginManager(_services())
        url = plugins.get("url")
        assert isinstance(url, UrlPlugin)
        assert url.from_route("adminIndexView", {"slug": "hello"}) == "/admin/dashboard/view/hello"

    def test_application_plugins_merged(self) -> None:
        config = ManagerConfig(invokables={"markdownToHtml": Markdown, "opaqueId": OpaqueId})
        plugins = PluginManager(_services(controller_plugins=config))
        assert plugins.available() == ["markdownToHtml", "opaqueId", "url"]
        assert isinstance(plugins.get("opaqueId"), OpaqueId)
        assert plugins.is_framework("url")
        assert not plugins.is_framework("opaqueId")

    def test_conflict_with_framework_plugin(self) -> None:
        config = ManagerConfig(invokables={"url": Markdown})
        with pytest.raises(ConfigurationConflictError) as exc_info:
            PluginManager(_services(controller_plugins=config))
        assert exc_info.value.namespace == "controller_plugins"
        assert exc_info.value.conflicts == ("url",)

    def test_missing_plugin(self) -> None:
        plugins = PluginManager(_services())
        with pytest.raises(ServiceNotFoundError, match="controller_plugins"):
            plugins.get("flashMessenger")


class TestViewHelperManager:
    def test_framework_helpers(self) -> None:
        helpers = ViewHelperManager(_services())
        assert helpers.available() == ["head_title", "url"]
        assert isinstance(helpers.get("url"), UrlHelper)
        assert isinstance(helpers.get("head_title"), HeadTitle)

    def test_conflict_lists_every_key(self) -> None:
        config = ManagerConfig(
            invokables={"url": Markdown, "head_title": Markdown, "truncate": Markdown}
        )
        with pytest.raises(ConfigurationConflictError) as exc_info:
            ViewHelperManager(_services(view_helpers=config))
        assert exc_info.value.conflicts == ("head_title", "url")

    def test_factory_sees_owning_service_manager(self) -> None:
        services = _services(
            view_helpers=ManagerConfig(factories={"who": lambda helpers: helpers.services})
        )
        assert ViewHelperManager(services).get("who") is services

    def test_as_globals(self) -> None:
        helpers = ViewHelperManager(_services())
        names = helpers.as_globals()
        assert set(names) == {"head_title", "url"}
        assert names["url"] is helpers.get("url")

    def test_head_title_uses_config(self) -> None:
        helpers = ViewHelperManager(_services(title_separator=" - ", default_title="Portal"))
        title = helpers.get("head_title")
        assert title() == "Portal"
        title("Dashboard")
        title("Admin", "prepend")
        assert title() == "Admin - Dashboard"


class TestMemoizedMerge:
    def test_merged_registry_stored_in_container(self) -> None:
        container = ApplicationContainer()
        ViewHelperManager(_services(container))
        assert container.has("view_helpers", REGISTRY_KEY)
        assert not container.has("controller_plugins", REGISTRY_KEY)

    def test_merge_reused_across_requests(self) -> None:
        container = ApplicationContainer()
        first = ViewHelperManager(_services(container))
        second = ViewHelperManager(_services(container))
        assert first.registry is second.registry
        assert first.get("url") is not second.get("url")

    def test_stored_merge_is_not_revalidated(self) -> None:
        container = ApplicationContainer()
        ViewHelperManager(_services(container))
        # A later manager with a conflicting config reuses the validated merge
        conflicting = ManagerConfig(invokables={"url": Markdown})
        helpers = ViewHelperManager(_services(container, view_helpers=conflicting))
        assert isinstance(helpers.get("url"), UrlHelper)

    def test_conflict_not_stored(self) -> None:
        container = ApplicationContainer()
        conflicting = ManagerConfig(invokables={"url": Markdown})
        with pytest.raises(ConfigurationConflictError):
            ViewHelperManager(_services(container, view_helpers=conflicting))
        assert not container.has("view_helpers", REGISTRY_KEY)

    def test_merge_idempotent(self) -> None:
        framework = compile_registry({"invokables": {"url": Markdown}})
        application = ManagerConfig(invokables={"opaqueId": OpaqueId})
        services = _services()
        first = merged_registry(services, "plugins", framework, application)
        second = merged_registry(services, "plugins", framework, application)
        assert first is second
        assert first == merged_registry(_services(), "plugins", framework, application)


class TestCustomNamespace:
    def test_subclass_declares_namespace_and_framework(self) -> None:
        class FilterManager(NamespacedExtensionManager):
            namespace = "view_helpers"
            framework = Registry()

        manager = FilterManager(
            _services(view_helpers=ManagerConfig(invokables={"markdown": Markdown}))
        )
        assert manager.available() == ["markdown"]
