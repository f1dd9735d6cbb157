"""Content negotiation — maps handler return values to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

from typing import Any

from kida import Environment

from scribble.errors import ConfigurationError
from scribble.http.response import Response
from scribble.templating.integration import render_template
from scribble.templating.returns import Template


def negotiate(value: Any, *, kida_env: Environment | None = None) -> Response:
    """Convert a route handler's return value to a Response.

    Dispatch order:

    1. ``Response``      -> pass through
    2. ``Template``      -> render via kida -> 200, text/html
    3. ``str``           -> 200, text/html
    4. ``bytes``         -> 200, application/octet-stream
    5. ``(value, int)``  -> negotiate value, override status
    """
    match value:
        case Response():
            return value
        case Template():
            if kida_env is None:
                msg = (
                    "Template return type requires kida integration. "
                    "Ensure a template_dir is configured in AppConfig."
                )
                raise ConfigurationError(msg)
            return Response(body=render_template(kida_env, value))
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case (inner, int() as status):
            return negotiate(inner, kida_env=kida_env).with_status(status)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                "Return str, bytes, Template, Response, or a (value, status) tuple."
            )
            raise TypeError(msg)
