"""Per-request state held in context variables.

``request_var`` carries the ``Request`` being served and ``g`` is a free
form namespace for it. The pipeline sets both before dispatch and clears
them afterwards, so data a middleware stores on ``g`` reaches the handler
without crossing into a concurrent request.
"""

from contextvars import ContextVar
from typing import Any

from scribble.http.request import Request

request_var: ContextVar[Request] = ContextVar("scribble_request")

_g_store: ContextVar[dict[str, Any] | None] = ContextVar("scribble_g", default=None)


def get_request() -> Request:
    """The request being served. ``LookupError`` outside of one."""
    return request_var.get()


def _current() -> dict[str, Any]:
    values = _g_store.get()
    if values is None:
        values = {}
        _g_store.set(values)
    return values


class _RequestGlobals:
    """Attribute namespace backed by the current request's dict.

    ::

        g.content_type = "text/html; charset=utf-8"   # middleware
        g.get("content_type")                          # handler
    """

    __slots__ = ()

    def __getattr__(self, name: str) -> Any:
        values = _current()
        if name not in values:
            msg = f"'g' has no attribute {name!r} in the current request scope"
            raise AttributeError(msg)
        return values[name]

    def __setattr__(self, name: str, value: Any) -> None:
        _current()[name] = value

    def __contains__(self, name: str) -> bool:
        return name in _current()

    def get(self, name: str, default: Any = None) -> Any:
        return _current().get(name, default)

    def _reset(self) -> None:
        _g_store.set(None)

    def __repr__(self) -> str:
        return f"<g {_current()!r}>"


g = _RequestGlobals()
