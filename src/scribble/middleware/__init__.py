"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    ForceHTMLMiddleware -- Force ``text/html; charset=utf-8`` on every response
    TrailingSlashMiddleware -- Route ``/path/`` as ``/path``
"""

from scribble.middleware.builtin import ForceHTMLMiddleware, TrailingSlashMiddleware
from scribble.middleware.protocol import Middleware, Next

__all__ = [
    "ForceHTMLMiddleware",
    "Middleware",
    "Next",
    "TrailingSlashMiddleware",
]
