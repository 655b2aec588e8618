"""Shared fixtures: the blog application's routes and a configured Application."""

from typing import Any

import pytest

from wren.app import Application

BLOG_ROUTES: dict[str, dict[str, Any]] = {
    "adminIndexIndex": {
        "route": "/admin",
        "module": "admin",
        "controller": "index",
        "action": "index",
    },
    "adminIndexDashboard": {
        "route": "/admin/dashboard(/page/:page)?",
        "module": "admin",
        "controller": "index",
        "action": "dashboard",
    },
    "adminIndexView": {
        "route": "/admin/dashboard/view/:slug",
        "module": "admin",
        "controller": "index",
        "action": "view",
    },
    "blogIndexIndex": {
        "route": "/(page/:page/index.html)?",
        "module": "blog",
        "controller": "index",
        "action": "index",
    },
    "blogIndexView": {
        "route": "/:category_slug/articles/:slug/index.html",
        "module": "blog",
        "controller": "index",
        "action": "view",
    },
    "blogComments": {
        "route": "/blog/:slug/comments(/:page)?",
        "module": "blog",
        "controller": "comment",
        "action": "list",
    },
}


class PostService:
    def __init__(self, repository: "PostRepository") -> None:
        self.repository = repository


class PostRepository:
    pass


def post_service_factory(services: Any) -> PostService:
    return PostService(services.get("PostRepository"))


class Truncate:
    def __call__(self, text: str, length: int = 10) -> str:
        return text if len(text) <= length else text[:length] + "..."


@pytest.fixture
def blog_config() -> dict[str, Any]:
    return {
        "service_manager": {
            "invokables": {"PostRepository": PostRepository},
            "factories": {"PostService": post_service_factory},
        },
        "view_helpers": {"invokables": {"truncate": Truncate}},
        "router": {"routes": BLOG_ROUTES},
        "title_separator": " - ",
        "default_title": "Daily Politics",
        "session": {"name": "JSSESSIONID"},
    }


@pytest.fixture
def app(blog_config: dict[str, Any]) -> Application:
    return Application(blog_config)
