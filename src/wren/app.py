"""Wren application class.

Mutable during setup (middleware and route registration).
Frozen when ``app.listen()`` is called or the first request arrives.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke
from wren._internal.types import Handler
from wren.config import AppConfig
from wren.errors import ConfigurationError
from wren.middleware.registry import MiddlewareRegistry, Stage
from wren.routing.router import Router
from wren.server.handler import handle_request

logger = logging.getLogger("wren.app")


class App:
    """The wren application.

    Requests run through three stages that share one ``RequestContext``:
    ``pre_routing`` middleware, the route handler, then ``post_routing``
    middleware. A response sent from any middleware chunk ends the
    request; there is no ``next()``.

    Usage::

        app = App()

        app.use("pre_routing", load_user)

        @app.route("/")
        async def index(ctx):
            await ctx.send(200, "landing page")

        app.listen(3500, lambda: print("listening"))

    Thread safety:
        Registration is single-threaded (module import time). The freeze
        transition uses a Lock + double-check so exactly one caller
        freezes the app, even if the server calls ``__call__()``
        concurrently on first request.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_ready_callbacks",
        "_router",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        if self.config.session_cookie.signed and not self.config.cookies.keys:
            msg = "SessionCookieConfig.signed requires CookieOptions.keys to be set."
            raise ConfigurationError(msg)

        self._middleware = MiddlewareRegistry()
        self._router = Router()
        self._ready_callbacks: list[Callable[[], Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    # -- Registration --

    def use(self, group: Stage | str, chunk: Handler) -> int:
        """Register a middleware chunk in ``"pre_routing"`` or ``"post_routing"``.

        Returns the number of chunks now in that group.

        Raises:
            ConfigurationError: If *group* is unknown or the app is frozen.
        """
        return self._middleware.add(group, chunk)

    def route(self, path: str, handler: Handler | None = None) -> Any:
        """Register a route handler for an exact *path*.

        ``path="*"`` registers the default handler for unmatched paths.
        Works directly or as a decorator::

            app.route("/home", home)

            @app.route("*")
            async def fallback(ctx):
                await ctx.send(404, f"nothing at {ctx.url.path}")

        Raises:
            ConfigurationError: If the app is frozen.
        """
        if handler is not None:
            self._router.register(path, handler)
            return handler

        def decorator(func: Handler) -> Handler:
            self._router.register(path, func)
            return func

        return decorator

    # -- Server --

    def listen(
        self,
        port: int | None = None,
        on_ready: Callable[[], Any] | None = None,
        *,
        host: str | None = None,
    ) -> None:
        """Freeze the app and serve it until interrupted.

        *on_ready* (sync or async) runs once the server has started.
        """
        if on_ready is not None:
            self._ready_callbacks.append(on_ready)
        self._ensure_frozen()

        _host = host or self.config.host
        _port = port or self.config.port
        logger.info("Serving on http://%s:%d", _host, _port)

        from wren.server.serve import run_server

        run_server(self, _host, _port, log_level=self.config.log_level)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        await handle_request(
            scope,
            receive,
            send,
            app=self,
            router=self._router,
            middleware=self._middleware,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup, before the first HTTP request, then
        runs the ready callbacks.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    for callback in self._ready_callbacks:
                        await invoke(callback)
                except Exception as exc:
                    logger.exception("Startup callback failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Freeze the middleware registry and route table.

        MUST only be called while holding _freeze_lock.
        """
        self._middleware.freeze()
        self._router.freeze()
        self._frozen = True
        logger.debug(
            "App frozen: %d routes, default=%s, %d pre-routing, %d post-routing chunks",
            len(self._router.routes),
            self._router.default is not None,
            len(self._middleware.chunks(Stage.PRE_ROUTING)),
            len(self._middleware.chunks(Stage.POST_ROUTING)),
        )
