"""Server startup.

Runs the app under uvicorn with the live ``App`` object, so no import
string is needed. Lifespan is forced on: the ``listen`` ready callback
runs during lifespan startup, once the socket is about to accept.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wren.app import App


def run_server(app: App, host: str, port: int, *, log_level: str = "info") -> None:
    """Start a blocking uvicorn server for *app*.

    Args:
        app: ASGI callable (wren App instance).
        host: Bind host address.
        port: Bind port number.
        log_level: uvicorn log level name.
    """
    import uvicorn

    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        lifespan="on",
        log_level=log_level,
    )
    uvicorn.Server(config).run()
