from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from ditree.collection import ObjectsCollection

T = TypeVar("T")


@runtime_checkable
class Resolver(Protocol):
    """Resolution capability handed to native injection hooks.

    Registration storages and object containers implement it, so an
    ``init_dependencies`` hook can pull its dependencies by calling back into
    the storage that is building the instance.
    """

    def resolve(self, service_type: type[T]) -> T:
        """Return the instance registered for ``service_type``."""
        ...

    def resolve_all(self, service_type: type[T]) -> ObjectsCollection[T]:
        """Return every instance registered for ``service_type`` across scopes."""
        ...

    def is_registered(self, service_type: Any) -> bool:
        """Return whether ``service_type`` is registered in this scope chain."""
        ...


__all__ = ["Resolver"]
