"""Middleware — plain callables grouped into stages.

A middleware chunk is any callable taking the request context::

    async def chunk(ctx: RequestContext) -> None: ...

Chunks run in registration order. A chunk that sends a response stops
the request; one that returns without sending lets it continue.
"""

from wren.middleware.registry import MiddlewareRegistry, Stage

__all__ = ["MiddlewareRegistry", "Stage"]
