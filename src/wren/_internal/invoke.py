"""Invoke helpers — call sync or async user callables uniformly.

Middleware chunks, route handlers, and the ``listen`` ready callback
can all be ``def`` or ``async def``. The sync/async check lives here.

Usage::

    from wren._internal.invoke import invoke

    result = await invoke(chunk, ctx)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
