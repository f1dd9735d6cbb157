"""Invoke helper — call sync or async handlers uniformly.

Handlers, error handlers, and middleware factories can be ``def`` or
``async def``. Every call site goes through ``invoke`` so the
sync/async check lives in exactly one place.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
