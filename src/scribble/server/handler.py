"""The per-request pipeline for ASGI ``http`` scopes.

Builds a ``Request``, runs it through the middleware chain into the
router and the matched handler, and writes whatever ``Response`` comes
out back to the server.
"""

import inspect
from collections.abc import Callable
from typing import Any

from kida import Environment

from scribble._internal.asgi import Receive, Scope, Send
from scribble._internal.invoke import invoke
from scribble.context import g, request_var
from scribble.errors import HTTPError, NotFound
from scribble.http.request import Request
from scribble.http.response import Response
from scribble.middleware.protocol import Next
from scribble.routing.params import convert_param
from scribble.routing.route import RouteMatch
from scribble.routing.router import Router
from scribble.server.errors import handle_http_error, handle_internal_error
from scribble.server.negotiation import negotiate
from scribble.server.sender import send_response

type Providers = dict[type, Callable[..., Any]]


def build_chain(middleware: tuple[Callable[..., Any], ...], endpoint: Next) -> Next:
    """Wrap *endpoint* so the first middleware in the tuple runs first."""
    chain = endpoint
    for mw in reversed(middleware):

        async def step(req: Request, _mw: Any = mw, _next: Next = chain) -> Response:
            return await _mw(req, _next)

        chain = step
    return chain


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Callable[..., Any], ...],
    error_handlers: dict[int | type, Callable[..., Any]],
    kida_env: Environment | None = None,
    debug: bool,
    providers: Providers | None = None,
    max_body_size: int | None = None,
) -> None:
    """Serve one HTTP request.

    Errors from routing or from the handler are turned into responses
    inside the chain, so every middleware sees them on the way out.
    Only a failure in a middleware itself reaches the outer boundary.
    """
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive, max_body_size=max_body_size)

    async def dispatch(req: Request) -> Response:
        try:
            match = router.match(req.method, req.path)
            return await _invoke_handler(match, req, kida_env=kida_env, providers=providers)
        except HTTPError as exc:
            return await handle_http_error(exc, req, error_handlers, kida_env, debug)
        except Exception as exc:
            return await handle_internal_error(exc, req, error_handlers, kida_env, debug)

    token = request_var.set(request)
    try:
        response = await build_chain(middleware, dispatch)(request)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, kida_env, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, kida_env, debug)
    finally:
        g._reset()
        request_var.reset(token)

    await send_response(response, send)


async def _invoke_handler(
    match: RouteMatch,
    request: Request,
    *,
    kida_env: Environment | None = None,
    providers: Providers | None = None,
) -> Response:
    request = request.with_path_params(match.path_params)
    result = await invoke(match.route.handler, **_handler_kwargs(match, request, providers))
    return negotiate(result, kida_env=kida_env)


def _handler_kwargs(
    match: RouteMatch,
    request: Request,
    providers: Providers | None,
) -> dict[str, Any]:
    """Fill the handler's parameters.

    ``request`` (by name or annotation) first, then path params converted
    by their constraint, then anything registered with ``app.provide()``
    for the parameter's annotation. A path value the converter rejects
    means the URL does not exist, so it becomes a 404.
    """
    kwargs: dict[str, Any] = {}
    for name, param in inspect.signature(match.route.handler, eval_str=True).parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
        elif name in match.path_params:
            kind = match.param_types.get(name, "str")
            try:
                kwargs[name] = convert_param(match.path_params[name], kind)
            except ValueError:
                raise NotFound() from None
        elif providers and param.annotation in providers:
            kwargs[name] = providers[param.annotation]()
    return kwargs
