"""Shared type aliases used across wren modules."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from wren.context import RequestContext

# Middleware chunk or route handler: receives the request context,
# sync or async. The return value is ignored.
Handler: TypeAlias = Callable[["RequestContext"], Any]
