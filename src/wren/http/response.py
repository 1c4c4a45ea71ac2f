"""Mutable response stream for one HTTP exchange.

Unlike the request, the response is written incrementally: headers and
cookies are collected, then ``start()`` emits the status line, ``write()``
emits body chunks, and ``end()`` closes the exchange. ``headers_sent``
and ``finished`` record how far it got — the stage runner relies on
``headers_sent`` to decide whether the pipeline must stop.
"""

from wren._internal.asgi import Send
from wren.http.cookies import SetCookie


class ResponseStream:
    """The write side of a request, bound to the ASGI ``send`` callable."""

    __slots__ = ("_send", "cookies", "finished", "headers", "headers_sent", "status")

    def __init__(self, send: Send) -> None:
        self._send = send
        self.status: int = 200
        self.headers: list[tuple[str, str]] = []
        self.cookies: list[SetCookie] = []
        self.headers_sent: bool = False
        self.finished: bool = False

    # -- Headers --

    def get_header(self, name: str) -> str | None:
        """Return the value of header *name*, or ``None``."""
        key = name.lower()
        for existing, value in self.headers:
            if existing == key:
                return value
        return None

    def set_header(self, name: str, value: str) -> None:
        """Set header *name*, replacing any previous value."""
        self._check_not_sent()
        key = name.lower()
        self.headers = [(n, v) for n, v in self.headers if n != key]
        self.headers.append((key, str(value)))

    # -- Body --

    async def start(self, status: int | None = None) -> None:
        """Send the status line, headers, and queued cookies."""
        self._check_not_sent()
        if status is not None:
            self.status = status
        raw_headers = [
            (name.encode("latin-1"), value.encode("latin-1")) for name, value in self.headers
        ]
        raw_headers.extend(
            (b"set-cookie", cookie.to_header_value().encode("latin-1")) for cookie in self.cookies
        )
        self.headers_sent = True
        await self._send(
            {
                "type": "http.response.start",
                "status": self.status,
                "headers": raw_headers,
            }
        )

    async def write(self, chunk: bytes) -> None:
        """Send a body chunk, starting the response if needed."""
        if self.finished:
            msg = "Cannot write to a finished response."
            raise RuntimeError(msg)
        if not self.headers_sent:
            await self.start()
        if chunk:
            await self._send({"type": "http.response.body", "body": chunk, "more_body": True})

    async def end(self, chunk: bytes = b"") -> None:
        """Send the final body chunk and close the response."""
        if self.finished:
            return
        if not self.headers_sent:
            await self.start()
        self.finished = True
        await self._send({"type": "http.response.body", "body": chunk, "more_body": False})

    def _check_not_sent(self) -> None:
        if self.headers_sent:
            msg = "Response headers have already been sent."
            raise RuntimeError(msg)
