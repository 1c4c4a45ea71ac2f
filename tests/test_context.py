"""Tests for wren.context — building the per-request context."""

from typing import Any

import pytest

from wren.app import App
from wren.config import AppConfig, CookieOptions, SessionCookieConfig
from wren.context import create_context
from wren.errors import ParseError
from wren.http.request import Request
from wren.http.response import ResponseStream
from wren.sessions import encode_session, fingerprint_session


def _request(path: str = "/", query: bytes = b"", cookie: str = "", scheme: str = "http") -> Request:
    headers = [(b"cookie", cookie.encode("latin-1"))] if cookie else []
    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "headers": headers,
        "query_string": query,
        "scheme": scheme,
    }

    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request.from_asgi(scope, receive)


async def _discard(message: object) -> None:
    return None


class TestCreateContext:
    def test_url_from_path_and_query(self) -> None:
        ctx = create_context(_request("/search", b"q=wren&page=2"), ResponseStream(_discard), App())
        assert ctx.url.path == "/search"
        assert ctx.url.query["q"] == "wren"
        assert ctx.url.query.get("page") == "2"
        assert ctx.url.raw == "/search?q=wren&page=2"

    def test_no_session_cookie_gives_empty_session(self) -> None:
        ctx = create_context(_request(), ResponseStream(_discard), App())
        assert ctx.session == {}
        assert ctx.error is None

    def test_session_decoded_from_cookie(self) -> None:
        cookie = f"wren_session={encode_session({'uid': 7})}"
        ctx = create_context(_request(cookie=cookie), ResponseStream(_discard), App())
        assert ctx.session == {"uid": 7}

    def test_fingerprint_of_decoded_session(self) -> None:
        cookie = f"wren_session={encode_session({'uid': 7})}"
        ctx = create_context(_request(cookie=cookie), ResponseStream(_discard), App())
        assert ctx._meta.session_fingerprint == fingerprint_session({"uid": 7})

    def test_custom_cookie_name(self) -> None:
        app = App(AppConfig(session_cookie=SessionCookieConfig(name="APPSERVER")))
        cookie = f"APPSERVER={encode_session({'a': 1})}; wren_session={encode_session({'b': 2})}"
        ctx = create_context(_request(cookie=cookie), ResponseStream(_discard), app)
        assert ctx.session == {"a": 1}

    def test_unsigned_cookie_ignored_when_signing(self) -> None:
        app = App(
            AppConfig(
                cookies=CookieOptions(keys=("k1",)),
                session_cookie=SessionCookieConfig(signed=True),
            )
        )
        cookie = f"wren_session={encode_session({'admin': True})}"
        ctx = create_context(_request(cookie=cookie), ResponseStream(_discard), app)
        assert ctx.session == {}

    def test_malformed_cookie_raises(self) -> None:
        with pytest.raises(ParseError):
            create_context(_request(cookie="wren_session=@@@"), ResponseStream(_discard), App())

    def test_sends_nothing(self) -> None:
        response = ResponseStream(_discard)
        create_context(_request(), response, App())
        assert response.headers_sent is False
        assert response.cookies == []
