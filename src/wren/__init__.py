"""Wren — a small ASGI application layer with an explicit request lifecycle.

Every request runs through three stages sharing one context object:
pre-routing middleware, an exact-path route handler, and post-routing
middleware. Sending a response ends the request. The session lives in
a (optionally signed) cookie and is rewritten only when it changes.

Basic usage::

    from wren import App

    app = App()

    @app.route("/")
    async def index(ctx):
        ctx.session["visits"] = ctx.session.get("visits", 0) + 1
        await ctx.send(200, "landing page")

    app.listen(3500)
"""

__version__ = "0.1.0"
__all__ = [
    "CONTENT_HEADERS",
    "App",
    "AppConfig",
    "ConfigurationError",
    "CookieOptions",
    "HTTPError",
    "NotFound",
    "ParseError",
    "PayloadTooLarge",
    "RequestContext",
    "SessionCookieConfig",
    "Stage",
    "WrenError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wren.app import App

        return App

    if name in ("AppConfig", "CookieOptions", "SessionCookieConfig"):
        from wren import config as _config

        return getattr(_config, name)

    if name == "RequestContext":
        from wren.context import RequestContext

        return RequestContext

    if name == "Stage":
        from wren.middleware.registry import Stage

        return Stage

    if name == "CONTENT_HEADERS":
        from wren.http.content import CONTENT_HEADERS

        return CONTENT_HEADERS

    if name in (
        "ConfigurationError",
        "HTTPError",
        "NotFound",
        "ParseError",
        "PayloadTooLarge",
        "WrenError",
    ):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
