"""Built-in middleware: forced content type and trailing-slash normalization."""

from scribble.context import g
from scribble.http.request import Request
from scribble.http.response import Response
from scribble.middleware.protocol import Next

HTML_CONTENT_TYPE = "text/html; charset=utf-8"


class ForceHTMLMiddleware:
    """Force a single content type on every response.

    The content type is recorded on ``g.content_type`` before the rest
    of the chain runs, so later middleware and handlers can see it, and
    is applied to whatever response comes back, including 404 and 405
    responses produced by routing.

    Usage::

        app.add_middleware(ForceHTMLMiddleware())
    """

    __slots__ = ("content_type",)

    def __init__(self, content_type: str = HTML_CONTENT_TYPE) -> None:
        self.content_type = content_type

    async def __call__(self, request: Request, next: Next) -> Response:
        g.content_type = self.content_type
        response = await next(request)
        return response.with_content_type(self.content_type)


class TrailingSlashMiddleware:
    """Drop one trailing slash from the request path before routing.

    ``/articles/`` is routed as ``/articles``. The root path ``/`` is
    left alone.
    """

    __slots__ = ()

    async def __call__(self, request: Request, next: Next) -> Response:
        path = request.path
        if path != "/" and path.endswith("/"):
            path = path.removesuffix("/")
            request = request.with_path(path)
        return await next(request)
