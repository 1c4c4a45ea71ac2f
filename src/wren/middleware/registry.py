"""Middleware registry — the two named stage groups.

Chunks are registered into ``pre_routing`` or ``post_routing`` during
setup; insertion order is execution order. ``freeze()`` converts both
groups to tuples, after which registration fails.
"""

from collections.abc import Sequence
from enum import StrEnum

from wren._internal.types import Handler
from wren.errors import ConfigurationError


class Stage(StrEnum):
    """A middleware group. Routing sits between the two."""

    PRE_ROUTING = "pre_routing"
    POST_ROUTING = "post_routing"


class MiddlewareRegistry:
    """Ordered middleware chunks per stage.

    Usage::

        registry = MiddlewareRegistry()
        registry.add("pre_routing", load_user)
        registry.freeze()
        registry.chunks(Stage.PRE_ROUTING)  # (load_user,)
    """

    __slots__ = ("_frozen", "_groups")

    def __init__(self) -> None:
        self._groups: dict[Stage, Sequence[Handler]] = {stage: [] for stage in Stage}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add(self, group: Stage | str, chunk: Handler) -> int:
        """Append *chunk* to *group* and return the group's new length.

        Raises:
            ConfigurationError: If *group* is not a known stage, or the
                registry is frozen.
        """
        try:
            stage = Stage(group)
        except ValueError:
            known = ", ".join(repr(s.value) for s in Stage)
            msg = f"Unknown middleware group {group!r}. Expected one of: {known}."
            raise ConfigurationError(msg) from None

        if self._frozen:
            msg = (
                f"Cannot add {stage.value} middleware after the app has started. "
                "Register middleware before calling app.listen()."
            )
            raise ConfigurationError(msg)

        chunks = self._groups[stage]
        assert isinstance(chunks, list)
        chunks.append(chunk)
        return len(chunks)

    def chunks(self, stage: Stage) -> Sequence[Handler]:
        """Return the chunks registered for *stage*, in order."""
        return self._groups[stage]

    def freeze(self) -> None:
        """Make both groups immutable."""
        self._groups = {stage: tuple(chunks) for stage, chunks in self._groups.items()}
        self._frozen = True
