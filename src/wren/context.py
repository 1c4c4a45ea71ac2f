"""Per-request context.

One ``RequestContext`` is built for every request and threaded through
pre-routing middleware, the route handler, and post-routing middleware.
All three stages see — and may mutate — the same instance::

    async def load_user(ctx: RequestContext) -> None:
        ctx.session.setdefault("visits", 0)
        ctx.session["visits"] += 1

    app.use("pre_routing", load_user)

The context is a plain data holder. The response helpers are free
functions in ``wren.server.sender`` that take the context explicitly;
the methods here only delegate to them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from wren.http.cookies import CookieJar
from wren.http.request import Request
from wren.http.response import ResponseStream
from wren.http.url import URL
from wren.server import sender
from wren.sessions import decode_session, fingerprint_session

if TYPE_CHECKING:
    from wren.app import App


@dataclass(frozen=True, slots=True)
class ContextMeta:
    """Framework bookkeeping hidden from handlers.

    ``session_fingerprint`` is the digest of the session as decoded at
    request start; ``send()`` compares against it to decide whether the
    session cookie must be rewritten.
    """

    app: App
    cookies: CookieJar
    session_fingerprint: str


@dataclass(slots=True)
class RequestContext:
    """The mutable unit of work shared by every stage of one request."""

    req: Request
    res: ResponseStream
    url: URL
    session: Any
    _meta: ContextMeta = field(repr=False)
    error: BaseException | None = None

    async def send(
        self,
        status: int,
        body: Any = None,
        header: Mapping[str, str] | None = None,
    ) -> None:
        await sender.send(self, status, body, header)

    async def send_file(
        self,
        status: int,
        filepath: str,
        header: Mapping[str, str] | None = None,
    ) -> None:
        await sender.send_file(self, status, filepath, header)

    async def send_json(self, status: int, value: Any, indent: int | str | None = None) -> None:
        await sender.send_json(self, status, value, indent)

    async def redirect(self, status: int, location: str) -> None:
        await sender.redirect(self, status, location)

    async def get_json(self) -> Any:
        return await sender.get_json(self)


def create_context(request: Request, response: ResponseStream, app: App) -> RequestContext:
    """Build the context for one request.

    Reads and decodes the session cookie and records its fingerprint.
    Sends nothing.

    Raises:
        ParseError: If the session cookie is present but malformed.
    """
    config = app.config
    cookies = CookieJar(
        request.cookies,
        response,
        config.cookies,
        secure_connection=request.scheme == "https",
    )

    session_cookie = config.session_cookie
    session = decode_session(cookies.get(session_cookie.name, signed=session_cookie.signed))

    return RequestContext(
        req=request,
        res=response,
        url=URL.parse(request.path, request.query_string),
        session=session,
        _meta=ContextMeta(
            app=app,
            cookies=cookies,
            session_fingerprint=fingerprint_session(session),
        ),
    )
