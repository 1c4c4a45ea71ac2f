"""Tests for wren.http.response — the incremental response stream."""

from typing import Any

import pytest

from wren.http.cookies import SetCookie
from wren.http.response import ResponseStream


def _stream() -> tuple[ResponseStream, list[dict[str, Any]]]:
    sent: list[dict[str, Any]] = []

    async def send(message: dict[str, Any]) -> None:
        sent.append(message)

    return ResponseStream(send), sent


class TestHeaders:
    def test_set_replaces(self) -> None:
        response, _ = _stream()
        response.set_header("Content-Type", "text/plain")
        response.set_header("content-type", "text/html")
        assert response.headers == [("content-type", "text/html")]
        assert response.get_header("CONTENT-TYPE") == "text/html"

    def test_get_missing(self) -> None:
        response, _ = _stream()
        assert response.get_header("location") is None

    async def test_set_after_start_raises(self) -> None:
        response, _ = _stream()
        await response.start()
        with pytest.raises(RuntimeError, match="already been sent"):
            response.set_header("x-late", "1")


class TestStart:
    async def test_emits_headers_and_cookies(self) -> None:
        response, sent = _stream()
        response.set_header("content-type", "text/plain")
        response.cookies.append(SetCookie("a", "1"))
        await response.start(201)
        assert response.headers_sent
        assert sent[0]["status"] == 201
        assert (b"content-type", b"text/plain") in sent[0]["headers"]
        assert (b"set-cookie", b"a=1; Path=/; HttpOnly; SameSite=lax") in sent[0]["headers"]

    async def test_start_twice_raises(self) -> None:
        response, _ = _stream()
        await response.start()
        with pytest.raises(RuntimeError):
            await response.start()


class TestWriteEnd:
    async def test_write_starts_response(self) -> None:
        response, sent = _stream()
        await response.write(b"chunk")
        assert sent[0]["type"] == "http.response.start"
        assert sent[1] == {"type": "http.response.body", "body": b"chunk", "more_body": True}

    async def test_end_closes(self) -> None:
        response, sent = _stream()
        await response.end(b"bye")
        assert response.finished
        assert sent[-1] == {"type": "http.response.body", "body": b"bye", "more_body": False}

    async def test_end_twice_is_noop(self) -> None:
        response, sent = _stream()
        await response.end()
        await response.end()
        assert len(sent) == 2

    async def test_write_after_end_raises(self) -> None:
        response, _ = _stream()
        await response.end()
        with pytest.raises(RuntimeError, match="finished"):
            await response.write(b"late")
