"""Response helpers — every response leaves through ``send()``.

``send()`` is the single choke point for responses: it is the only place
the session cookie is rewritten, so every other helper delegates to it.
``transmit()`` is the low-level half that turns a body value into ASGI
messages on a ``ResponseStream``.

Body values accepted by ``send()``:

- ``None`` — empty body
- ``str`` — UTF-8 text (``text/plain`` unless a content type is set)
- ``bytes`` — raw bytes (``application/octet-stream`` unless set)
- an iterable or async iterable of byte chunks — streamed
- anything else (dict, list, number, bool) — serialized as JSON
"""

from __future__ import annotations

import json
import mimetypes
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Mapping
from typing import TYPE_CHECKING, Any

import anyio

from wren.http.content import JSON
from wren.http.response import ResponseStream
from wren.sessions import encode_session, fingerprint_session

if TYPE_CHECKING:
    from anyio import AsyncFile

    from wren.context import RequestContext

_FILE_CHUNK_SIZE = 64 * 1024


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def transmit(response: ResponseStream, status: int, body: Any = None) -> None:
    """Write *status* and *body* to *response* and finish it."""
    if isinstance(body, (AsyncIterable, Iterable)) and not isinstance(
        body, (str, bytes, bytearray, memoryview, Mapping, list, tuple)
    ):
        await _transmit_stream(response, status, body)
        return

    if body is None:
        payload = b""
    elif isinstance(body, str):
        payload = body.encode("utf-8")
        _default_content_type(response, "text/plain; charset=utf-8")
    elif isinstance(body, (bytes, bytearray, memoryview)):
        payload = bytes(body)
        _default_content_type(response, "application/octet-stream")
    else:
        payload = json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        _default_content_type(response, "application/json; charset=utf-8")

    if not _body_allowed(status):
        payload = b""
    response.set_header("content-length", str(len(payload)))
    await response.start(status)
    await response.end(payload)


async def _transmit_stream(
    response: ResponseStream,
    status: int,
    chunks: AsyncIterable[bytes] | Iterable[bytes],
) -> None:
    # No content-length; the server falls back to chunked transfer encoding
    _default_content_type(response, "application/octet-stream")
    await response.start(status)
    if _body_allowed(status):
        if isinstance(chunks, AsyncIterable):
            async for chunk in chunks:
                await response.write(_encode_chunk(chunk))
        else:
            for chunk in chunks:
                await response.write(_encode_chunk(chunk))
    await response.end()


def _encode_chunk(chunk: str | bytes) -> bytes:
    return chunk.encode("utf-8") if isinstance(chunk, str) else chunk


def _default_content_type(response: ResponseStream, content_type: str) -> None:
    if response.get_header("content-type") is None:
        response.set_header("content-type", content_type)


# -- Context helpers --


async def send(
    ctx: RequestContext,
    status: int,
    body: Any = None,
    header: Mapping[str, str] | None = None,
) -> None:
    """Send the response for *ctx*, persisting the session if it changed.

    *header* is a header mapping, usually one entry of
    ``wren.http.content.CONTENT_HEADERS``.
    """
    meta = ctx._meta
    if fingerprint_session(ctx.session) != meta.session_fingerprint:
        cfg = meta.app.config.session_cookie
        meta.cookies.set(
            cfg.name,
            encode_session(ctx.session),
            max_age=cfg.max_age,
            path=cfg.path,
            domain=cfg.domain,
            secure=cfg.secure,
            httponly=cfg.httponly,
            samesite=cfg.samesite,
            signed=cfg.signed,
            overwrite=cfg.overwrite,
        )
    if header:
        for name, value in header.items():
            ctx.res.set_header(name, value)
    await transmit(ctx.res, status, body)


async def send_file(
    ctx: RequestContext,
    status: int,
    filepath: str,
    header: Mapping[str, str] | None = None,
) -> None:
    """Stream the file at *filepath* as the response body.

    Without *header*, the content type is guessed from the file name.

    Raises:
        OSError: If the file cannot be opened.
    """
    file = await anyio.open_file(filepath, "rb")
    if header is None:
        guessed, _ = mimetypes.guess_type(str(filepath))
        if guessed is not None:
            header = {"content-type": guessed}
    async with file:
        await send(ctx, status, _iter_file(file), header)


async def _iter_file(file: AsyncFile[bytes]) -> AsyncIterator[bytes]:
    while chunk := await file.read(_FILE_CHUNK_SIZE):
        yield chunk


async def send_json(
    ctx: RequestContext,
    status: int,
    value: Any,
    indent: int | str | None = None,
) -> None:
    """Send *value* as JSON, pretty-printed when *indent* is given."""
    if not indent:
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    else:
        text = json.dumps(value, indent=indent, ensure_ascii=False)
    await send(ctx, status, text, JSON)


async def redirect(ctx: RequestContext, status: int, location: str) -> None:
    """Send *status* with a ``location`` header and an empty body.

    The status is not checked against the 3xx range.
    """
    ctx.res.set_header("location", location)
    await send(ctx, status)


async def get_json(ctx: RequestContext) -> Any:
    """Read and parse the request body as JSON.

    Raises:
        ParseError: If the body is not valid JSON.
        PayloadTooLarge: If the body exceeds ``AppConfig.max_body_size``.
    """
    return await ctx.req.json(limit=ctx._meta.app.config.max_body_size)
