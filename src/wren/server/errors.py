"""Error responses for failed requests.

Maps HTTPError exceptions and unexpected failures to plain-text
responses. Error responses bypass ``send()``: a failed request never
persists its session.

If the failure happened after the response headers went out, no second
response is possible; the stream is closed and the failure logged.
"""

import logging
import traceback

from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import ResponseStream
from wren.server.sender import transmit

logger = logging.getLogger("wren.server")


async def write_error(
    response: ResponseStream,
    status: int,
    detail: str,
    headers: tuple[tuple[str, str], ...] = (),
) -> None:
    """Send a plain-text error response, or close a response already started."""
    if response.headers_sent:
        await response.end()
        return

    # Discard anything the failed handler staged
    response.headers.clear()
    response.cookies.clear()
    for name, value in headers:
        response.set_header(name, value)
    response.set_header("content-type", "text/plain; charset=utf-8")
    await transmit(response, status, detail)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    response: ResponseStream,
    *,
    debug: bool,
) -> None:
    """Answer an HTTPError with its own status and detail."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    if response.headers_sent:
        logger.warning(
            "%d %s %s raised after the response started: %s",
            exc.status,
            request.method,
            request.path,
            exc.detail,
        )

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"
    await write_error(response, exc.status, detail, exc.headers)


async def handle_internal_error(
    exc: BaseException,
    request: Request,
    response: ResponseStream,
    *,
    debug: bool,
) -> None:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path, exc_info=exc)

    if debug:
        body = "".join(traceback.format_exception(exc))
    else:
        body = "Internal Server Error"
    await write_error(response, 500, body)
