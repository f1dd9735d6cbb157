"""Scribble — a small ASGI blog and the framework layer it runs on.

Basic usage::

    from scribble import App

    app = App()

    @app.route("/articles/{id:int}", name="articles.show")
    def show(id: int):
        return f"文章ID: {id}"

    app.run()

The blog itself lives in ``scribble.blog``; ``scribble run`` serves it.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "Router",
    "ScribbleError",
    "Template",
    "URLBuildError",
    "g",
    "get_request",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import scribble`` fast while providing a clean top-level API.
    """
    if name == "App":
        from scribble.app import App

        return App

    if name == "AppConfig":
        from scribble.config import AppConfig

        return AppConfig

    if name == "Request":
        from scribble.http.request import Request

        return Request

    if name == "Response":
        from scribble.http.response import Response

        return Response

    if name == "Router":
        from scribble.routing.router import Router

        return Router

    if name == "Template":
        from scribble.templating.returns import Template

        return Template

    if name in ("Middleware", "Next"):
        from scribble.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("g", "get_request"):
        from scribble import context as _ctx

        return getattr(_ctx, name)

    if name in (
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "ScribbleError",
        "URLBuildError",
    ):
        from scribble import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
