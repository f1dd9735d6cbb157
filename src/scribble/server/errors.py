"""Turning failures into responses.

``HTTPError`` subclasses become their status code, anything else becomes
a 500. A handler registered with ``@app.error`` for the exception type or
the status code is preferred over the default, an HTML-escaped detail.
"""

import html
import inspect
import logging
import traceback
from collections.abc import Callable
from typing import Any

from kida import Environment

from scribble.errors import HTTPError
from scribble.http.request import Request
from scribble.http.response import Response
from scribble.server.negotiation import negotiate

logger = logging.getLogger("scribble.server")

type ErrorHandlers = dict[int | type, Callable[..., Any]]


def _lookup(
    error_handlers: ErrorHandlers, exc: Exception, status: int
) -> Callable[..., Any] | None:
    return error_handlers.get(type(exc)) or error_handlers.get(status)


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
    kida_env: Environment | None,
) -> Response:
    """Call *handler* with as many of ``(request, exc)`` as it accepts.

    Sync and async handlers are both supported; the result goes through
    the same conversion as a route handler's return value.
    """
    arity = len(inspect.signature(handler).parameters)
    result = handler(*(request, exc)[:arity])
    if inspect.isawaitable(result):
        result = await result
    return negotiate(result, kida_env=kida_env)


def _apply_error(response: Response, exc: HTTPError) -> Response:
    """Give *response* the error's status and any headers it is missing."""
    if response.status == 200:
        response = response.with_status(exc.status)
    for name, value in exc.headers:
        if response.header(name) is None:
            response = response.with_header(name, value)
    return response


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: ErrorHandlers,
    kida_env: Environment | None,
    debug: bool,
) -> Response:
    """Response for a raised ``HTTPError``.

    A registered handler's body is used as is; the status and headers of
    the error (``Allow`` on a 405, say) are filled in when it left them out.
    """
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    handler = _lookup(error_handlers, exc, exc.status)
    if handler is not None:
        return _apply_error(await call_error_handler(handler, request, exc, kida_env), exc)

    if debug and exc.detail:
        text = f"{exc.status}: {exc.detail}"
    else:
        text = exc.detail or f"Error {exc.status}"
    return _apply_error(Response(body=html.escape(text)), exc)


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: ErrorHandlers,
    kida_env: Environment | None,
    debug: bool,
) -> Response:
    """Log *exc* with its traceback and answer 500.

    The traceback reaches the client only in debug mode, HTML-escaped.
    A 500 handler that itself fails is logged and the default body sent.
    """
    logger.exception("500 %s %s", request.method, request.path, exc_info=exc)

    handler = _lookup(error_handlers, exc, 500)
    if handler is not None:
        try:
            response = await call_error_handler(handler, request, exc, kida_env)
        except Exception:
            logger.exception("error handler for 500 failed")
        else:
            return response.with_status(500) if response.status == 200 else response

    if debug:
        trace = html.escape("".join(traceback.format_exception(exc)))
        return Response(body=f"<h1>Internal Server Error</h1><pre>{trace}</pre>", status=500)
    return Response(body="Internal Server Error", status=500)
