"""Tests for scribble.http.response — chainable immutable Response."""

from scribble.http.response import Response


class TestResponse:
    def test_defaults(self) -> None:
        r = Response("hi")
        assert r.status == 200
        assert r.content_type == "text/html; charset=utf-8"
        assert r.headers == ()

    def test_with_status_returns_copy(self) -> None:
        r = Response("hi")
        r2 = r.with_status(404)
        assert r2.status == 404
        assert r.status == 200

    def test_with_header_appends(self) -> None:
        r = Response().with_header("X-A", "1").with_header("X-A", "2")
        assert r.headers == (("X-A", "1"), ("X-A", "2"))

    def test_with_headers(self) -> None:
        r = Response().with_headers({"X-A": "1", "X-B": "2"})
        assert r.header("x-b") == "2"

    def test_header_case_insensitive_first(self) -> None:
        r = Response().with_header("Allow", "GET").with_header("allow", "POST")
        assert r.header("ALLOW") == "GET"
        assert r.header("x-missing") is None

    def test_with_content_type(self) -> None:
        assert Response().with_content_type("text/plain").content_type == "text/plain"

    def test_body_conversions(self) -> None:
        assert Response("你好").body_bytes == "你好".encode()
        assert Response("你好".encode()).text == "你好"
