"""Tests for scribble.app — App lifecycle, registration, and ASGI entry."""

import logging
from typing import Any

import pytest

from scribble.app import App
from scribble.config import AppConfig
from scribble.errors import ConfigurationError, HTTPError
from scribble.http.request import Request
from scribble.http.response import Response
from scribble.routing.router import Router
from scribble.testing import TestClient


class TestAppRegistration:
    def test_route_decorator(self) -> None:
        app = App()

        @app.route("/")
        def index():
            return "hello"

        assert len(app._pending_routes) == 1
        assert app._pending_routes[0].path == "/"

    def test_route_with_methods(self) -> None:
        app = App()

        @app.route("/articles", methods=["GET", "POST"])
        def articles():
            return "articles"

        assert app._pending_routes[0].methods == ["GET", "POST"]

    def test_error_decorator(self) -> None:
        app = App()

        @app.error(404)
        def not_found():
            return "Not found"

        assert 404 in app._error_handlers

    def test_cannot_register_after_freeze(self) -> None:
        app = App()
        app._ensure_frozen()
        with pytest.raises(RuntimeError, match="Cannot modify the app"):
            app.route("/late")(lambda: "late")

    def test_duplicate_route_name_fails_at_freeze(self) -> None:
        app = App()
        app.route("/a", name="same")(lambda: "a")
        app.route("/b", name="same")(lambda: "b")
        with pytest.raises(ConfigurationError):
            app._ensure_frozen()

    def test_freeze_logs_summary(self, caplog: pytest.LogCaptureFixture) -> None:
        app = App()
        app.route("/")(lambda: "x")
        with caplog.at_level(logging.DEBUG, logger="scribble.app"):
            app._ensure_frozen()
        assert "app frozen: 1 routes" in caplog.text

    def test_url_for(self) -> None:
        app = App()
        app.route("/articles/{id:int}", name="articles.show")(lambda id: str(id))
        assert app.url_for("articles.show", id=5) == "/articles/5"


class TestAppDispatch:
    async def test_path_param_converted(self) -> None:
        app = App()

        @app.route("/articles/{id:int}")
        def show(id: int):
            return f"{type(id).__name__}:{id}"

        async with TestClient(app) as client:
            response = await client.get("/articles/42")
        assert response.text == "int:42"

    async def test_async_handler(self) -> None:
        app = App()

        @app.route("/")
        async def index():
            return "async"

        async with TestClient(app) as client:
            assert (await client.get("/")).text == "async"

    async def test_request_injected(self) -> None:
        app = App()

        @app.route("/echo", methods=["POST"])
        async def echo(request: Request):
            return await request.text()

        async with TestClient(app) as client:
            response = await client.post("/echo", body=b"ping")
        assert response.text == "ping"

    async def test_router_provided(self) -> None:
        app = App()

        @app.route("/target", name="target")
        def target():
            return "t"

        @app.route("/link")
        def link(router: Router):
            return router.url_for("target")

        async with TestClient(app) as client:
            assert (await client.get("/link")).text == "/target"

    async def test_custom_provider(self) -> None:
        class Greeter:
            def hello(self) -> str:
                return "hi"

        app = App()
        app.provide(Greeter, Greeter)

        @app.route("/")
        def index(greeter: Greeter):
            return greeter.hello()

        async with TestClient(app) as client:
            assert (await client.get("/")).text == "hi"

    async def test_method_not_allowed_has_allow_header(self) -> None:
        app = App()
        app.route("/articles")(lambda: "list")
        app.route("/articles", methods=["POST"])(lambda: "store")

        async with TestClient(app) as client:
            response = await client.request("DELETE", "/articles")
        assert response.status == 405
        assert response.header("allow") == "GET, POST"

    async def test_body_too_large(self) -> None:
        app = App(AppConfig(max_content_length=8))

        @app.route("/upload", methods=["POST"])
        async def upload(request: Request):
            return str(len(await request.body()))

        async with TestClient(app) as client:
            ok = await client.post("/upload", body=b"12345678")
            too_big = await client.post("/upload", body=b"123456789")
        assert ok.text == "8"
        assert too_big.status == 413


class TestErrorHandlers:
    async def test_404_handler(self) -> None:
        app = App()

        @app.error(404)
        def not_found():
            return "<h1>gone</h1>"

        async with TestClient(app) as client:
            response = await client.get("/missing")
        assert response.status == 404
        assert response.text == "<h1>gone</h1>"

    async def test_handler_receives_request_and_exc(self) -> None:
        app = App()

        @app.error(405)
        def not_allowed(request: Request, exc: HTTPError):
            return f"{request.method} {exc.status}"

        app.route("/")(lambda: "x")

        async with TestClient(app) as client:
            response = await client.post("/")
        assert response.status == 405
        assert response.text == "POST 405"
        assert response.header("allow") == "GET"

    async def test_raised_http_error(self) -> None:
        app = App()

        @app.route("/teapot")
        def teapot():
            raise HTTPError(418, "short and stout")

        async with TestClient(app) as client:
            response = await client.get("/teapot")
        assert response.status == 418
        assert response.text == "short and stout"

    async def test_unhandled_exception_is_500(self, caplog: pytest.LogCaptureFixture) -> None:
        app = App()

        @app.route("/boom")
        def boom():
            raise RuntimeError("kaboom")

        async with TestClient(app) as client:
            with caplog.at_level(logging.ERROR, logger="scribble.server"):
                response = await client.get("/boom")
        assert response.status == 500
        assert response.text == "Internal Server Error"
        assert "kaboom" not in response.text
        assert "500 GET /boom" in caplog.text

    async def test_debug_500_shows_escaped_exception(self) -> None:
        app = App(AppConfig(debug=True))

        @app.route("/boom")
        def boom():
            raise RuntimeError("<bad>")

        async with TestClient(app) as client:
            response = await client.get("/boom")
        assert response.status == 500
        assert "&lt;bad&gt;" in response.text
        assert "<bad>" not in response.text

    async def test_500_handler(self) -> None:
        app = App()

        @app.error(500)
        def oops():
            return "custom failure"

        @app.route("/boom")
        def boom():
            raise ValueError("x")

        async with TestClient(app) as client:
            response = await client.get("/boom")
        assert response.status == 500
        assert response.text == "custom failure"

    async def test_failing_middleware_is_500(self) -> None:
        app = App()

        async def broken(request: Request, next) -> Response:
            raise RuntimeError("middleware broke")

        app.add_middleware(broken)
        app.route("/")(lambda: "unreachable")

        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.status == 500
        assert response.content_type == "text/html; charset=utf-8"


class TestLifespan:
    async def test_startup_and_shutdown(self) -> None:
        app = App()
        app.route("/")(lambda: "home")

        messages = iter([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return next(messages)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)

        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]
        assert app._frozen

    async def test_startup_failure_reported(self) -> None:
        app = App()
        app.route("/a", name="dup")(lambda: "a")
        app.route("/b", name="dup")(lambda: "b")

        async def receive() -> dict[str, Any]:
            return {"type": "lifespan.startup"}

        sent: list[dict[str, Any]] = []

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        assert sent[0]["type"] == "lifespan.startup.failed"
        assert "Duplicate route name" in sent[0]["message"]


class TestResponsePassthrough:
    async def test_explicit_response(self) -> None:
        app = App()

        @app.route("/created")
        def created():
            return Response("made", status=201).with_header("X-Id", "1")

        async with TestClient(app) as client:
            response = await client.get("/created")
        assert response.status == 201
        assert response.header("x-id") == "1"


class TestTemplates:
    async def test_url_for_global(self, tmp_path) -> None:
        from scribble.templating.returns import Template

        (tmp_path / "link.html").write_text(
            '<a href="{{ url_for("articles.show", id=7) }}">7</a>', encoding="utf-8"
        )
        app = App(AppConfig(template_dir=tmp_path))
        app.route("/articles/{id:int}", name="articles.show")(lambda id: str(id))
        app.route("/link")(lambda: Template("link.html"))

        async with TestClient(app) as client:
            response = await client.get("/link")
        assert response.text == '<a href="/articles/7">7</a>'

    async def test_custom_filter(self, tmp_path) -> None:
        from scribble.templating.returns import Template

        (tmp_path / "page.html").write_text("{{ name | shout }}", encoding="utf-8")
        app = App(AppConfig(template_dir=tmp_path))

        @app.template_filter()
        def shout(value: str) -> str:
            return value.upper()

        app.route("/")(lambda: Template("page.html", name="hi"))

        async with TestClient(app) as client:
            assert (await client.get("/")).text == "HI"
