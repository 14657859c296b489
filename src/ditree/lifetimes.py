from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Protocol


class ReferenceCollector(Protocol):
    """Receive the objects a container keeps alive."""

    def add_referenced_object(self, obj: Any) -> None: ...  # noqa: D102


class CollectedReferences:
    """List-backed ``ReferenceCollector`` for hosts without their own collector."""

    def __init__(self) -> None:
        self.objects: list[Any] = []

    def add_referenced_object(self, obj: Any) -> None:
        """Record ``obj`` unless it is ``None``."""
        if obj is not None:
            self.objects.append(obj)

    def __contains__(self, obj: object) -> bool:
        return any(held is obj for held in self.objects)

    def __len__(self) -> int:
        return len(self.objects)


class LifetimeHandler(ABC):
    """Decide whether a resolved instance is cached and reused.

    ``set`` is called at most once per created instance, after dependency
    injection and factory finalization completed.
    """

    @abstractmethod
    def get(self) -> Any | None:
        """Return the cached instance, or ``None`` when a new one must be built."""

    @abstractmethod
    def set(self, instance: Any) -> None:
        """Store a freshly created instance for future ``get`` calls."""

    def report_references(self, collector: ReferenceCollector) -> None:  # noqa: B027
        """Expose held instances to ``collector``. Holds nothing by default."""


class SingletonLifetime(LifetimeHandler):
    """Cache the first created instance for the lifetime of the storage."""

    __slots__ = ("_instance",)

    def __init__(self) -> None:
        self._instance: Any | None = None

    def get(self) -> Any | None:
        return self._instance

    def set(self, instance: Any) -> None:
        self._instance = instance

    def report_references(self, collector: ReferenceCollector) -> None:
        if self._instance is not None:
            collector.add_referenced_object(self._instance)


class InstanceLifetime(SingletonLifetime):
    """Singleton lifetime pre-filled with an existing object."""

    __slots__ = ()

    def __init__(self, instance: Any) -> None:
        super().__init__()
        self.set(instance)


class TransientLifetime(LifetimeHandler):
    """Never cache: every resolution builds a new instance."""

    __slots__ = ()

    def get(self) -> Any | None:
        return None

    def set(self, instance: Any) -> None:
        pass


class Lifetime(Enum):
    """Defines the lifetime of a registration."""

    TRANSIENT = "transient"
    """A new instance is created every time the service is requested."""

    SINGLETON = "singleton"
    """A single instance is created and shared for the lifetime of the storage."""

    def create_handler(self) -> LifetimeHandler:
        """Return a new handler implementing this lifetime."""
        if self is Lifetime.SINGLETON:
            return SingletonLifetime()
        return TransientLifetime()


__all__ = [
    "CollectedReferences",
    "InstanceLifetime",
    "Lifetime",
    "LifetimeHandler",
    "ReferenceCollector",
    "SingletonLifetime",
    "TransientLifetime",
]
