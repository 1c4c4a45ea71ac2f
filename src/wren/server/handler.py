"""Request driver — runs one request through the three stages.

The only component that touches the raw ASGI scope. Builds the
``Request``/``ResponseStream`` pair and the context, then::

    pre_routing  --STOP-->  done
        |
    routing      --no handler-->  404
        |
    post_routing --STOP-->  done
        |
    done (response sent)  or  500 (nothing was ever sent)

Every exception raised by a chunk or handler is converted into an
error response here; nothing propagates to the server.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke
from wren.context import RequestContext, create_context
from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import ResponseStream
from wren.middleware.registry import MiddlewareRegistry, Stage
from wren.routing.router import Router
from wren.server.errors import handle_http_error, handle_internal_error, write_error
from wren.server.stages import StageSignal, run_stage

if TYPE_CHECKING:
    from wren.app import App

logger = logging.getLogger("wren.server")

NO_RESPONSE_DETAIL = "No response was sent"


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    app: App,
    router: Router,
    middleware: MiddlewareRegistry,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    response = ResponseStream(send)
    ctx: RequestContext | None = None

    try:
        ctx = create_context(request, response, app)
        await _run_pipeline(ctx, router, middleware)
    except HTTPError as exc:
        if ctx is not None:
            ctx.error = exc
        await handle_http_error(exc, request, response, debug=app.config.debug)
    except Exception as exc:
        if ctx is not None:
            ctx.error = exc
        await handle_internal_error(exc, request, response, debug=app.config.debug)


async def _run_pipeline(ctx: RequestContext, router: Router, middleware: MiddlewareRegistry) -> None:
    if await run_stage(middleware.chunks(Stage.PRE_ROUTING), ctx) is StageSignal.STOP:
        return

    handler = router.resolve(ctx.url.path)
    await invoke(handler, ctx)

    if await run_stage(middleware.chunks(Stage.POST_ROUTING), ctx) is StageSignal.STOP:
        return

    if ctx.res.headers_sent:
        await ctx.res.end()
        return

    # Every stage finished without sending anything. Answer rather than
    # leave the client waiting on an open connection.
    logger.warning("%s %s finished without sending a response", ctx.req.method, ctx.url.path)
    await write_error(ctx.res, 500, NO_RESPONSE_DETAIL)
