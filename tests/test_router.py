"""Tests for wren.routing.router — exact-path router with default handler."""

import pytest

from wren.errors import ConfigurationError, NotFound
from wren.routing.router import DEFAULT_ROUTE, Router


def _index(ctx: object) -> None:
    return None


def _home(ctx: object) -> None:
    return None


def _fallback(ctx: object) -> None:
    return None


class TestResolve:
    def test_exact_match(self) -> None:
        router = Router()
        router.register("/", _index)
        router.register("/home", _home)
        assert router.resolve("/") is _index
        assert router.resolve("/home") is _home

    def test_no_prefix_or_trailing_slash_matching(self) -> None:
        router = Router()
        router.register("/home", _home)
        with pytest.raises(NotFound):
            router.resolve("/home/")
        with pytest.raises(NotFound):
            router.resolve("/home/sub")

    def test_default_handler_catches_unmatched(self) -> None:
        router = Router()
        router.register("/", _index)
        router.register(DEFAULT_ROUTE, _fallback)
        assert router.resolve("/xyz") is _fallback
        assert router.resolve("/") is _index

    def test_not_found_without_default(self) -> None:
        router = Router()
        router.register("/", _index)
        with pytest.raises(NotFound) as exc_info:
            router.resolve("/xyz")
        assert exc_info.value.status == 404
        assert "/xyz" in exc_info.value.detail

    def test_star_is_not_a_literal_route(self) -> None:
        router = Router()
        router.register("*", _fallback)
        assert "*" not in router.routes
        assert router.default is _fallback


class TestRegister:
    def test_last_registration_wins(self) -> None:
        router = Router()
        router.register("/", _index)
        router.register("/", _home)
        assert router.resolve("/") is _home

    def test_default_overwrites_default(self) -> None:
        router = Router()
        router.register("*", _index)
        router.register("*", _fallback)
        assert router.default is _fallback

    def test_register_after_freeze_raises(self) -> None:
        router = Router()
        router.register("/", _index)
        router.freeze()
        with pytest.raises(ConfigurationError, match="after the app has started"):
            router.register("/home", _home)

    def test_default_after_freeze_raises(self) -> None:
        router = Router()
        router.freeze()
        with pytest.raises(ConfigurationError):
            router.register("*", _fallback)

    def test_resolve_after_freeze(self) -> None:
        router = Router()
        router.register("/", _index)
        router.freeze()
        assert router.resolve("/") is _index

    def test_routes_is_read_only(self) -> None:
        router = Router()
        router.register("/", _index)
        with pytest.raises(TypeError):
            router.routes["/home"] = _home  # type: ignore[index]
