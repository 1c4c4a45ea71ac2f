"""Tests for wren.http.request — the immutable request and body access."""

from typing import Any

import pytest

from wren.errors import ParseError, PayloadTooLarge
from wren.http.request import Request


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope dict."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": "/",
        "query_string": b"",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _receiver(*chunks: bytes):
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks)
    ] or [{"type": "http.request", "body": b"", "more_body": False}]
    pending = iter(messages)
    calls = {"count": 0}

    async def receive() -> dict[str, Any]:
        calls["count"] += 1
        return next(pending, {"type": "http.disconnect"})

    return receive, calls


class TestFromAsgi:
    def test_metadata(self) -> None:
        receive, _ = _receiver()
        request = Request.from_asgi(
            _make_scope(method="POST", path="/users", query_string=b"page=2"), receive
        )
        assert request.method == "POST"
        assert request.path == "/users"
        assert request.query_string == "page=2"
        assert request.scheme == "http"
        assert request.server == ("localhost", 8000)
        assert request.client == ("127.0.0.1", 54321)

    def test_cookies_parsed(self) -> None:
        receive, _ = _receiver()
        scope = _make_scope(headers=[(b"cookie", b"a=1; b=2")])
        request = Request.from_asgi(scope, receive)
        assert request.cookies == {"a": "1", "b": "2"}

    def test_headers_case_insensitive(self) -> None:
        receive, _ = _receiver()
        scope = _make_scope(headers=[(b"Content-Type", b"text/plain")])
        request = Request.from_asgi(scope, receive)
        assert request.headers["content-type"] == "text/plain"
        assert request.headers["CONTENT-TYPE"] == "text/plain"

    def test_missing_optional_keys(self) -> None:
        receive, _ = _receiver()
        request = Request.from_asgi({"type": "http", "method": "GET", "path": "/"}, receive)
        assert request.query_string == ""
        assert request.server is None
        assert request.client is None
        assert request.cookies == {}

    def test_frozen(self) -> None:
        receive, _ = _receiver()
        request = Request.from_asgi(_make_scope(), receive)
        with pytest.raises(AttributeError):
            request.method = "POST"  # type: ignore[misc]

    @pytest.mark.parametrize(("value", "expected"), [(b"12", 12), (b"nope", None)])
    def test_content_length(self, value: bytes, expected: int | None) -> None:
        receive, _ = _receiver()
        request = Request.from_asgi(_make_scope(headers=[(b"content-length", value)]), receive)
        assert request.content_length == expected


class TestBody:
    async def test_joins_chunks(self) -> None:
        receive, _ = _receiver(b"hel", b"lo")
        request = Request.from_asgi(_make_scope(), receive)
        assert await request.body() == b"hello"

    async def test_cached(self) -> None:
        receive, calls = _receiver(b"hello")
        request = Request.from_asgi(_make_scope(), receive)
        await request.body()
        await request.body()
        assert calls["count"] == 1

    async def test_declared_length_over_limit(self) -> None:
        receive, calls = _receiver(b"0123456789")
        scope = _make_scope(headers=[(b"content-length", b"10")])
        request = Request.from_asgi(scope, receive)
        with pytest.raises(PayloadTooLarge):
            await request.body(limit=4)
        assert calls["count"] == 0

    async def test_streamed_length_over_limit(self) -> None:
        receive, _ = _receiver(b"012", b"345", b"678")
        request = Request.from_asgi(_make_scope(), receive)
        with pytest.raises(PayloadTooLarge) as exc_info:
            await request.body(limit=5)
        assert "5 byte limit" in exc_info.value.detail

    async def test_at_limit_is_allowed(self) -> None:
        receive, _ = _receiver(b"12345")
        request = Request.from_asgi(_make_scope(), receive)
        assert await request.body(limit=5) == b"12345"


class TestJson:
    async def test_parses(self) -> None:
        receive, _ = _receiver(b'{"a": [1, 2]}')
        request = Request.from_asgi(_make_scope(), receive)
        assert await request.json() == {"a": [1, 2]}

    @pytest.mark.parametrize("body", [b"", b"{bad", b"\xff\xfe"])
    async def test_invalid(self, body: bytes) -> None:
        receive, _ = _receiver(body)
        request = Request.from_asgi(_make_scope(), receive)
        with pytest.raises(ParseError, match="Invalid JSON body"):
            await request.json()
