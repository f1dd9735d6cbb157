"""Tests for scribble.templating — environment setup and filters."""

from scribble.config import AppConfig
from scribble.templating.filters import field_error
from scribble.templating.integration import create_environment, render_template
from scribble.templating.returns import Template


class TestFieldError:
    def test_present(self) -> None:
        assert field_error({"title": "bad"}, "title") == "bad"

    def test_absent(self) -> None:
        assert field_error({"title": "bad"}, "body") == ""

    def test_none_errors(self) -> None:
        assert field_error(None, "title") == ""


class TestTemplate:
    def test_context_from_kwargs(self) -> None:
        tpl = Template("page.html", a=1, b="x")
        assert tpl.name == "page.html"
        assert tpl.context == {"a": 1, "b": "x"}


class TestCreateEnvironment:
    def test_renders_with_builtin_filter(self, tmp_path) -> None:
        (tmp_path / "form.html").write_text(
            '{% set msg = errors | field_error("title") %}'
            '{% if msg %}<p class="error">{{ msg }}</p>{% end %}',
            encoding="utf-8",
        )
        env = create_environment(AppConfig(template_dir=tmp_path), {}, {})
        html = render_template(env, Template("form.html", errors={"title": "empty"}))
        assert '<p class="error">empty</p>' in html
        assert render_template(env, Template("form.html", errors={})).strip() == ""

    def test_user_filters_and_globals(self, tmp_path) -> None:
        (tmp_path / "page.html").write_text(
            "{{ name | shout }} {{ link('x') }}", encoding="utf-8"
        )
        env = create_environment(
            AppConfig(template_dir=tmp_path),
            {"shout": lambda s: s.upper()},
            {"link": lambda s: f"/{s}"},
        )
        assert render_template(env, Template("page.html", name="hi")) == "HI /x"

    def test_autoescape(self, tmp_path) -> None:
        (tmp_path / "page.html").write_text("{{ value }}", encoding="utf-8")
        env = create_environment(AppConfig(template_dir=tmp_path), {}, {})
        html = render_template(env, Template("page.html", value="<script>"))
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
