from __future__ import annotations

import inspect
import types
from typing import Any, TypeGuard


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_protocol_class(candidate: object) -> bool:
    """Return true when candidate is a ``typing.Protocol`` subclass declaring a protocol.

    Args:
        candidate: Value being checked for protocol-ness.

    """
    return is_runtime_class(candidate) and bool(getattr(candidate, "_is_protocol", False))


def is_interface_like(candidate: object) -> bool:
    """Return true when candidate cannot be instantiated directly.

    Non-class keys, protocols and classes with unimplemented abstract methods
    are interface-like.

    Args:
        candidate: Service key being classified.

    """
    if not is_runtime_class(candidate):
        return True
    if is_protocol_class(candidate):
        return True
    return inspect.isabstract(candidate)


__all__ = ["is_interface_like", "is_protocol_class", "is_runtime_class"]
