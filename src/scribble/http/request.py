"""Immutable HTTP request.

Everything parsed from the ASGI scope is fixed at construction; the body
is read lazily and only once. Middleware that rewrites the path hands a
``replace()``-d copy down the chain rather than mutating the original.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from scribble._internal.asgi import Receive
from scribble.errors import PayloadTooLarge
from scribble.http.headers import Headers

if TYPE_CHECKING:
    from scribble.http.forms import FormData

_FORM_DEFAULT = "application/x-www-form-urlencoded"


@dataclass(frozen=True, slots=True)
class Request:
    """One incoming HTTP request.

    ``body()``, ``text()`` and ``form()`` are coroutines that share a
    per-request cache, so each may be awaited any number of times.
    """

    method: str
    path: str
    headers: Headers
    query_string: bytes
    path_params: dict[str, str]
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None
    max_body_size: int | None = None

    _receive: Receive | None = field(default=None, repr=False, compare=False)
    # Shared by copies made with with_path()/with_path_params()
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_asgi(
        cls,
        scope: dict[str, Any],
        receive: Receive,
        *,
        max_body_size: int | None = None,
    ) -> Request:
        """Build a request from an ASGI ``http`` scope."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query_string=scope.get("query_string", b""),
            path_params={},
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            max_body_size=max_body_size,
            _receive=receive,
        )

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        """Declared body size, or None when absent or not a number."""
        raw = self.headers.get("content-length")
        if raw is None or not raw.strip().isdigit():
            return None
        return int(raw)

    def with_path(self, path: str) -> Request:
        """Copy of this request with *path* replaced."""
        return replace(self, path=path)

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Copy of this request carrying the router's captured params."""
        return replace(self, path_params=path_params)

    async def stream(self) -> AsyncGenerator[bytes, None]:
        """Yield non-empty body chunks as the server delivers them."""
        if self._receive is None:
            return
        more = True
        while more:
            message = await self._receive()
            more = message.get("more_body", False)
            chunk = message.get("body", b"")
            if chunk:
                yield chunk

    async def body(self) -> bytes:
        """The complete body.

        Raises ``PayloadTooLarge`` as soon as the declared length or the
        bytes received so far go over ``max_body_size``.
        """
        cached = self._cache.get("body")
        if cached is not None:
            return cached

        limit = self.max_body_size
        if limit is not None and (self.content_length or 0) > limit:
            raise PayloadTooLarge(limit)

        received = bytearray()
        async for chunk in self.stream():
            received += chunk
            if limit is not None and len(received) > limit:
                raise PayloadTooLarge(limit)

        data = bytes(received)
        self._cache["body"] = data
        return data

    async def text(self) -> str:
        """The body decoded as UTF-8."""
        return (await self.body()).decode("utf-8")

    async def form(self) -> FormData:
        """The body parsed as a URL-encoded or multipart form.

        A request without a Content-Type is treated as URL-encoded.
        ``UnsupportedFormEncoding`` is raised for any other content type.
        """
        cached = self._cache.get("form")
        if cached is not None:
            return cached

        from scribble.http.forms import parse_form_data

        parsed = parse_form_data(await self.body(), self.content_type or _FORM_DEFAULT)
        self._cache["form"] = parsed
        return parsed
