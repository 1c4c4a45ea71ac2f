"""The read side of one HTTP exchange.

Request metadata is fixed when the request driver builds the object from
the ASGI scope; only the body is read lazily, and at most once.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncGenerator, Mapping
from dataclasses import dataclass, field
from typing import Any

from wren._internal.asgi import Receive, Scope
from wren.errors import ParseError, PayloadTooLarge
from wren.http.cookies import parse_cookies
from wren.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """Request line, headers and parsed cookies, plus async body access.

    ``body()`` and ``json()`` drain the ASGI receive channel; the bytes
    are kept so later calls do not touch the channel again.
    """

    method: str
    path: str
    query_string: str
    headers: Headers
    scheme: str
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None
    cookies: Mapping[str, str]

    _receive: Receive = field(repr=False, compare=False)
    _received: list[bytes] = field(default_factory=list, repr=False, compare=False)

    @property
    def content_length(self) -> int | None:
        """Declared body size, or ``None`` when absent or not a number."""
        declared = self.headers.get("content-length", "")
        return int(declared) if declared.isdigit() else None

    # -- Async body access --

    async def stream(self) -> AsyncGenerator[bytes]:
        """Yield body chunks as the server delivers them."""
        more_body = True
        while more_body:
            message = await self._receive()
            more_body = message.get("more_body", False)
            if chunk := message.get("body", b""):
                yield chunk

    async def body(self, limit: int | None = None) -> bytes:
        """Read the whole body.

        With a *limit*, a body larger than *limit* bytes raises
        ``PayloadTooLarge``, either up front from ``content-length`` or
        as soon as the received bytes cross it.
        """
        if self._received:
            return self._received[0]

        declared = self.content_length
        if limit is not None and declared is not None and declared > limit:
            raise PayloadTooLarge(limit)

        buffer = bytearray()
        async for chunk in self.stream():
            buffer += chunk
            if limit is not None and len(buffer) > limit:
                raise PayloadTooLarge(limit)

        self._received.append(bytes(buffer))
        return self._received[0]

    async def json(self, limit: int | None = None) -> Any:
        """Decode the body as JSON.

        Raises:
            ParseError: If the body is not valid UTF-8 JSON.
            PayloadTooLarge: If the body exceeds *limit*.
        """
        try:
            return json_module.loads(await self.body(limit))
        except ValueError as exc:
            raise ParseError("Invalid JSON body") from exc

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Build the request for an ASGI ``http`` scope."""
        headers = Headers(scope.get("headers", ()))
        server, client = scope.get("server"), scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"] or "/",
            query_string=scope.get("query_string", b"").decode("latin-1"),
            headers=headers,
            scheme=scope.get("scheme", "http"),
            http_version=scope.get("http_version", "1.1"),
            server=(server[0], server[1]) if server else None,
            client=(client[0], client[1]) if client else None,
            cookies=parse_cookies(headers.get("cookie", "")),
            _receive=receive,
        )
