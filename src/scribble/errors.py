"""Scribble exception hierarchy.

Shared across Router, App, handler, and middleware so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class ScribbleError(Exception):
    """Base for all scribble-specific errors."""


class ConfigurationError(ScribbleError):
    """Raised when app configuration is invalid.

    Typically raised while registering routes or during ``App._freeze()``
    at startup. Never expected once the app is serving requests.
    """


class URLBuildError(ScribbleError):
    """Raised when a URL cannot be built from a route name.

    The route name is unknown, a parameter is missing, or a value does
    not satisfy the parameter's constraint. Always a programming error.
    """


class UnsupportedFormEncoding(ScribbleError, ValueError):
    """The request body is not URL-encoded or multipart form data."""


@dataclass(frozen=True, slots=True)
class HTTPError(ScribbleError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, middleware, or handlers. The ASGI handler
    catches these and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods and embeds
    the allowed methods in the detail string for developer visibility.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413 — request body exceeds ``AppConfig.max_content_length``."""

    def __init__(self, limit: int) -> None:
        super().__init__(status=413, detail=f"Request body exceeds {limit} bytes")
