"""The ``App`` object: registration at import time, a compiled ASGI app after."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from kida import Environment

from scribble._internal.asgi import ErrorHandler, Handler, Receive, Scope, Send
from scribble.config import AppConfig
from scribble.middleware.protocol import Middleware
from scribble.routing.route import Route
from scribble.routing.router import Router
from scribble.server.handler import handle_request
from scribble.templating.integration import create_environment

logger = logging.getLogger("scribble.app")


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    path: str
    handler: Handler
    methods: list[str] | None
    name: str | None


class App:
    """A scribble web application.

    Routes, error handlers, middleware, providers and template helpers are
    registered first. The first request, lifespan startup or ``run()``
    compiles them once (under a lock, checked twice, since several workers
    may race on the first request) and any later registration raises
    ``RuntimeError``.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_kida_env",
        "_middleware",
        "_middleware_list",
        "_pending_routes",
        "_providers",
        "_router",
        "_template_filters",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[_PendingRoute] = []
        self._middleware_list: list[Middleware] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._template_filters: dict[str, Callable[..., Any]] = {}
        self._providers: dict[type, Callable[..., Any]] = {}
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Set by _freeze()
        self._router: Router | None = None
        self._middleware: tuple[Callable[..., Any], ...] = ()
        self._kida_env: Environment | None = None

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Decorator registering *func* for *path*.

        *path* may hold ``{name}`` or ``{name:int}`` segments; *methods*
        defaults to GET and *name* is what ``url_for`` looks routes up by.
        Routes are tried in the order they were registered.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            self._pending_routes.append(_PendingRoute(path, func, methods, name))
            return func

        return decorator

    def provide(self, annotation: type, factory: Callable[..., Any]) -> None:
        """Inject ``factory()`` into handler parameters annotated *annotation*::

            app.provide(Clock, SystemClock)

            @app.route("/now")
            def now(clock: Clock) -> str: ...

        The compiled ``Router`` is always provided, so a handler can
        declare ``router: Router`` to build URLs.
        """
        self._check_not_frozen()
        self._providers[annotation] = factory

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Decorator for a status code or exception type handler.

        It may take ``()``, ``(request)`` or ``(request, exc)``
        and return anything a route handler can.
        """

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    def add_middleware(self, middleware: Middleware) -> None:
        """Append to the middleware chain; earlier entries wrap later ones."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    def template_filter(
        self,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a kida template filter."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            self._template_filters[name or func.__name__] = func
            return func

        return decorator

    @property
    def router(self) -> Router:
        """The compiled router. Freezes the app on first access."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    def url_for(self, name: str, /, **params: object) -> str:
        """Build the path for a named route. See ``Router.url_for``."""
        return self.router.url_for(name, **params)

    def run(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        app_path: str | None = None,
    ) -> None:
        """Compile the app and serve it with pounce.

        Debug mode enables reload on source changes.
        """
        self._ensure_frozen()

        from scribble.server.dev import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug,
            app_path=app_path,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point for ``lifespan`` and ``http`` scopes."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()

        assert self._router is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
            error_handlers=self._error_handlers,
            kida_env=self._kida_env,
            debug=self.config.debug,
            providers=self._providers,
            max_body_size=self.config.max_content_length,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Answer the lifespan protocol.

        Startup compiles the app; a failure is reported as
        ``lifespan.startup.failed``.
        """
        while True:
            message = await receive()
            event = message["type"]

            if event == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    logger.exception("startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif event == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Build router, middleware tuple and template environment. Caller holds the lock."""
        router = Router()
        for pending in self._pending_routes:
            methods = frozenset(m.upper() for m in (pending.methods or ["GET"]))
            router.add(Route(pending.path, pending.handler, methods, pending.name))
        router.compile()
        self._router = router
        self._providers.setdefault(Router, lambda: router)

        self._middleware = tuple(self._middleware_list)

        self._kida_env = create_environment(
            self.config, self._template_filters, {"url_for": router.url_for}
        )

        self._frozen = True
        logger.debug(
            "app frozen: %d routes, %d middleware, templates from %s",
            len(router.routes),
            len(self._middleware),
            self.config.template_dir,
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware, and filters before calling app.run()."
            )
            raise RuntimeError(msg)
