"""Tests for wren.cli — argument parsing, app resolution, and subcommands."""

import sys
import types

import pytest

from conftest import BLOG_ROUTES
from wren.app import Application
from wren.cli import main
from wren.cli._resolve import resolve_app
from wren.cli._url import parse_params


@pytest.fixture
def _fake_app_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with wren Applications on sys.modules."""
    mod = types.ModuleType("_fake_wren_app")
    mod.app = Application({"router": {"routes": BLOG_ROUTES}})  # type: ignore[attr-defined]
    mod.empty = Application()  # type: ignore[attr-defined]
    mod.broken = Application(  # type: ignore[attr-defined]
        {"view_helpers": {"invokables": {"url": dict}}}
    )
    mod.create_app = lambda: Application()  # type: ignore[attr-defined]
    mod.make_string = lambda: "not an app"  # type: ignore[attr-defined]
    mod.failing_factory = lambda: 1 / 0  # type: ignore[attr-defined]
    mod.not_an_app = "just a string"  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_wren_app", mod)


class TestCLIHelp:
    @pytest.mark.parametrize("command", ["routes", "url", "check"])
    def test_subcommand_help_exits_zero(self, command: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([command, "--help"])
        assert exc_info.value.code == 0

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "wren" in capsys.readouterr().out

    @pytest.mark.parametrize("argv", [["routes"], ["url"], ["url", "myapp:app"], ["check"]])
    def test_missing_args(self, argv: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 2


@pytest.mark.usefixtures("_fake_app_module")
class TestResolveApp:
    def test_explicit_attribute(self) -> None:
        assert isinstance(resolve_app("_fake_wren_app:empty"), Application)

    def test_default_attribute(self) -> None:
        assert resolve_app("_fake_wren_app") is sys.modules["_fake_wren_app"].app

    def test_factory(self) -> None:
        assert isinstance(resolve_app("_fake_wren_app:create_app"), Application)

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("nonexistent_module_xyz:app")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_app("_fake_wren_app:does_not_exist")

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError, match=r"not a wren\.Application instance"):
            resolve_app("_fake_wren_app:not_an_app")

    def test_factory_returning_wrong_type(self) -> None:
        with pytest.raises(TypeError, match=r"resolved to str"):
            resolve_app("_fake_wren_app:make_string")

    def test_failing_factory(self) -> None:
        with pytest.raises(TypeError, match="failing_factory") as exc_info:
            resolve_app("_fake_wren_app:failing_factory")
        assert isinstance(exc_info.value.__cause__, ZeroDivisionError)


@pytest.mark.usefixtures("_fake_app_module")
class TestRoutesCommand:
    def test_lists_routes(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_wren_app:app"])
        out = capsys.readouterr().out
        assert out.splitlines()[0].split() == ["NAME", "ROUTE", "TARGET"]
        assert "blogComments" in out
        assert "/blog/:slug/comments(/:page)?" in out
        assert "blog/comment/list" in out

    def test_no_routes(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_wren_app:empty"])
        assert "No routes registered." in capsys.readouterr().out

    def test_bad_import(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "_fake_wren_app:not_an_app"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


@pytest.mark.usefixtures("_fake_app_module")
class TestUrlCommand:
    def test_reverses_route(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["url", "_fake_wren_app:app", "blogIndexView", "category_slug=eu", "slug=vote"])
        assert capsys.readouterr().out.strip() == "/eu/articles/vote/index.html"

    def test_optional_group_dropped(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["url", "_fake_wren_app:app", "adminIndexDashboard"])
        assert capsys.readouterr().out.strip() == "/admin/dashboard"

    def test_unknown_route(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["url", "_fake_wren_app:app", "missingRoute"])
        assert exc_info.value.code == 1
        assert "missingRoute" in capsys.readouterr().err

    def test_malformed_param(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["url", "_fake_wren_app:app", "adminIndexView", "slug"])
        assert exc_info.value.code == 2
        assert "key=value" in capsys.readouterr().err


class TestParseParams:
    def test_pairs(self) -> None:
        assert parse_params(["a=1", "b=x=y", "c="]) == {"a": "1", "b": "x=y", "c": ""}

    @pytest.mark.parametrize("pair", ["slug", "=value"])
    def test_rejects(self, pair: str) -> None:
        with pytest.raises(ValueError, match="key=value"):
            parse_params([pair])


@pytest.mark.usefixtures("_fake_app_module")
class TestCheckCommand:
    def test_valid(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["check", "_fake_wren_app:app"])
        out = capsys.readouterr().out
        assert "routes:             6" in out
        assert out.rstrip().endswith("OK")

    def test_conflict_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "_fake_wren_app:broken"])
        assert exc_info.value.code == 1
        assert "Configuration error" in capsys.readouterr().out
