from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ditree.lifetimes import ReferenceCollector
from ditree.ownership import HostObject

POST_INIT_METHOD_NAME = "post_init_dependencies"


class InstanceFactory(ABC):
    """Construct objects of concrete classes on behalf of a registration storage.

    Storages try their factories most recently registered first, so project
    specific factories override the built-in ``DefaultInstanceFactory``.
    Register a factory as a service under ``InstanceFactory`` to make a
    storage pick it up during ``init_services``.
    """

    @abstractmethod
    def is_supported(self, concrete_type: type[Any]) -> bool:
        """Return whether this factory can build ``concrete_type``."""

    @abstractmethod
    def create(self, placement: Any, concrete_type: type[Any]) -> Any:
        """Construct a new instance of ``concrete_type``.

        Implementations must never return ``None``; the storage treats that as
        a fatal configuration error.

        Args:
            placement: Long-lived object new instances belong to.
            concrete_type: Class to instantiate.

        """

    def finalize_creation(self, instance: Any) -> None:  # noqa: B027
        """Run post-construction steps once dependencies were injected."""

    def report_references(self, collector: ReferenceCollector) -> None:
        """Expose this factory and anything it holds to ``collector``."""
        collector.add_referenced_object(self)


class DefaultInstanceFactory(InstanceFactory):
    """Build any class with its no-argument constructor.

    ``HostObject`` subclasses receive the placement as their ``outer``. After
    injection the instance's ``post_init_dependencies`` method is called when
    it defines one.
    """

    def is_supported(self, concrete_type: type[Any]) -> bool:
        return isinstance(concrete_type, type)

    def create(self, placement: Any, concrete_type: type[Any]) -> Any:
        if issubclass(concrete_type, HostObject):
            return concrete_type(outer=placement)
        return concrete_type()

    def finalize_creation(self, instance: Any) -> None:
        post_init = getattr(instance, POST_INIT_METHOD_NAME, None)
        if callable(post_init):
            post_init()


__all__ = ["POST_INIT_METHOD_NAME", "DefaultInstanceFactory", "InstanceFactory"]
