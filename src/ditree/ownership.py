from __future__ import annotations

from typing import Any, ClassVar


class HostObject:
    """Represent an object living inside an ownership chain.

    Every host object may point at an ``outer`` object that owns it. Classes
    that act as long-lived enclosing scopes (an application session, a world)
    set ``long_lived = True`` so storages attached below them place new
    instances there.
    """

    long_lived: ClassVar[bool] = False

    def __init__(self, outer: Any = None) -> None:
        self.outer = outer


class TransientPlacement(HostObject):
    """Global holding area for objects without a long-lived owner."""

    def __repr__(self) -> str:
        return "<TransientPlacement>"


TRANSIENT_PLACEMENT = TransientPlacement()
"""Fallback placement used when no long-lived outer exists."""


def is_long_lived(candidate: object) -> bool:
    """Return whether ``candidate`` is a long-lived enclosing scope."""
    return bool(getattr(type(candidate), "long_lived", False))


def find_placement(owner: Any) -> Any:
    """Return where objects created for ``owner`` should live.

    The owner itself is skipped: the walk starts at its outer and stops at the
    first long-lived object. Returns ``TRANSIENT_PLACEMENT`` if none is found.

    Args:
        owner: Object the storage is attached to.

    """
    current = getattr(owner, "outer", None)
    while current is not None:
        if is_long_lived(current):
            return current
        current = getattr(current, "outer", None)
    return TRANSIENT_PLACEMENT


__all__ = [
    "TRANSIENT_PLACEMENT",
    "HostObject",
    "TransientPlacement",
    "find_placement",
    "is_long_lived",
]
