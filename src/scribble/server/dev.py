"""Serve an App with pounce.

Pounce's ``run()`` takes an import string (e.g., ``"myapp:app"``),
but scribble has a live ``App`` object, so ``pounce.Server`` is driven
directly with the ASGI callable.
"""


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    app_path: str | None = None,
) -> None:
    """Start a single-worker pounce server for *app*.

    Args:
        app: ASGI callable (scribble App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on source changes (debug mode).
        app_path: Optional ``"module:attribute"`` import string. When
            provided, pounce reimports the app on each reload cycle.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=1, reload=reload)
    Server(config, app, app_path=app_path).run()
