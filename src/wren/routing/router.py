"""Exact-path router.

Routes are registered during setup and frozen into a read-only mapping
when the app freezes. Lookup is a single dict access: there are no path
parameters or wildcards, except the ``*`` default handler that catches
every unmatched path.
"""

from collections.abc import Mapping
from types import MappingProxyType

from wren._internal.types import Handler
from wren.errors import ConfigurationError, NotFound

DEFAULT_ROUTE = "*"


class Router:
    """Map exact request paths to handlers.

    Usage::

        router = Router()
        router.register("/", index)
        router.register("*", fallback)
        router.freeze()
        router.resolve("/missing")  # fallback
    """

    __slots__ = ("_default", "_frozen", "_routes")

    def __init__(self) -> None:
        self._routes: dict[str, Handler] | MappingProxyType[str, Handler] = {}
        self._default: Handler | None = None
        self._frozen = False

    @property
    def routes(self) -> Mapping[str, Handler]:
        """Registered exact-path routes (the default handler excluded)."""
        return MappingProxyType(dict(self._routes))

    @property
    def default(self) -> Handler | None:
        return self._default

    def register(self, path: str, handler: Handler) -> None:
        """Register *handler* for *path*; ``"*"`` sets the default handler.

        A later registration for the same path replaces the earlier one.

        Raises:
            ConfigurationError: If the router is frozen.
        """
        if self._frozen:
            msg = (
                f"Cannot register route {path!r} after the app has started. "
                "Register routes before calling app.listen()."
            )
            raise ConfigurationError(msg)
        if path == DEFAULT_ROUTE:
            self._default = handler
            return
        assert isinstance(self._routes, dict)
        self._routes[path] = handler

    def freeze(self) -> None:
        """Freeze the route table. No more routes can be registered."""
        self._routes = MappingProxyType(self._routes)
        self._frozen = True

    def resolve(self, path: str) -> Handler:
        """Return the handler for *path*.

        Falls back to the default handler when no exact match exists.

        Raises:
            NotFound: If nothing matches and no default is registered.
        """
        handler = self._routes.get(path)
        if handler is not None:
            return handler
        if self._default is not None:
            return self._default
        raise NotFound(f"No route matches {path!r}")
