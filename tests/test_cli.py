"""Tests for scribble.cli — argument parsing, app resolution, routes listing."""

import sys
import types

import pytest

from scribble.app import App
from scribble.cli import main
from scribble.cli._resolve import resolve_app


@pytest.fixture
def _fake_app_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with scribble Apps on sys.modules."""
    mod = types.ModuleType("_fake_scribble_app")
    mod.app = App()  # type: ignore[attr-defined]
    mod.factory = lambda: App()  # type: ignore[attr-defined]
    mod.not_an_app = "just a string"  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_scribble_app", mod)


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "routes" in capsys.readouterr().out

    def test_bad_log_level(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", "--log-level", "loud"])
        assert exc_info.value.code == 2


@pytest.mark.usefixtures("_fake_app_module")
class TestResolveApp:
    def test_explicit_attribute(self) -> None:
        assert isinstance(resolve_app("_fake_scribble_app:app"), App)

    def test_default_attribute(self) -> None:
        assert isinstance(resolve_app("_fake_scribble_app"), App)

    def test_factory_called(self) -> None:
        assert isinstance(resolve_app("_fake_scribble_app:factory"), App)

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("nonexistent_module_xyz:app")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_app("_fake_scribble_app:does_not_exist")

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError, match="not a scribble App"):
            resolve_app("_fake_scribble_app:not_an_app")

    def test_blog_app(self) -> None:
        app = resolve_app("scribble.blog:app")
        assert isinstance(app, App)


class TestRoutesCommand:
    def test_lists_blog_routes_in_order(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "scribble.blog:create_app"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["METHOD", "PATH", "NAME", "HANDLER"]
        names = [line.split()[2] for line in lines[2:]]
        assert names == [
            "home",
            "about",
            "articles.show",
            "articles.index",
            "articles.store",
            "articles.create",
        ]
        assert any(line.split()[:2] == ["POST", "/articles"] for line in lines[2:])

    @pytest.mark.usefixtures("_fake_app_module")
    def test_no_routes(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_scribble_app:factory"])
        assert capsys.readouterr().out.strip() == "No routes registered."

    def test_unresolvable_app(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "nonexistent_module_xyz:app"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestRunCommand:
    def test_passes_overrides_to_app(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple[object, ...]] = []
        monkeypatch.setattr(
            App, "run", lambda self, host, port, app_path=None: calls.append((host, port, app_path))
        )
        main(["run", "scribble.blog:create_app", "--host", "0.0.0.0", "--port", "8080"])
        assert calls == [("0.0.0.0", 8080, "scribble.blog:create_app")]

    def test_defaults_from_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple[object, ...]] = []
        monkeypatch.setattr(
            App, "run", lambda self, host, port, app_path=None: calls.append((host, port))
        )
        main(["run"])
        assert calls == [("127.0.0.1", 3000)]
