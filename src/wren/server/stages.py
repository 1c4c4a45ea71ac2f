"""Stage runner — executes one middleware group against a context.

There is no ``next()`` callable. A chunk that wants the pipeline to stop
sends a response; a chunk that returns without sending lets the request
fall through to the next chunk, and after the last chunk, to the next
stage. ``run_stage`` turns that side effect into an explicit signal.
"""

import logging
from collections.abc import Iterable
from enum import Enum

from wren._internal.invoke import invoke
from wren._internal.types import Handler
from wren.context import RequestContext

logger = logging.getLogger("wren.server")


class StageSignal(Enum):
    """What the request driver should do after a stage."""

    CONTINUE = "continue"
    STOP = "stop"


async def run_stage(chunks: Iterable[Handler], ctx: RequestContext) -> StageSignal:
    """Run *chunks* in order until one of them sends a response.

    Each chunk is awaited to completion before the next starts. When a
    chunk leaves the response started, the response is finalized (if
    the chunk did not finish it) and ``StageSignal.STOP`` is returned.
    """
    for chunk in chunks:
        await invoke(chunk, ctx)
        if ctx.res.headers_sent:
            if not ctx.res.finished:
                await ctx.res.end()
            logger.debug(
                "%s %s answered by %s",
                ctx.req.method,
                ctx.url.path,
                getattr(chunk, "__qualname__", repr(chunk)),
            )
            return StageSignal.STOP
    return StageSignal.CONTINUE
