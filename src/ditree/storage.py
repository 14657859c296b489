from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, TypeVar

from ditree._internal.autoregistration import ConcreteTypeAutoregistrationPolicy
from ditree.collection import ObjectsCollection
from ditree.exceptions import (
    DITreeAbstractTypeNotRegisteredError,
    DITreeFactoryReturnedNoneError,
    DITreeInvalidRegistrationError,
    DITreeNoInstanceFactoryError,
    DITreeServiceNotRegisteredError,
)
from ditree.factories import DefaultInstanceFactory, InstanceFactory
from ditree.hooks import DEFAULT_DEPENDENCIES_REGISTRY, DependenciesRegistry, InjectionDispatcher
from ditree.lazy_type import LazyType, TypeSource
from ditree.lifetimes import LifetimeHandler, ReferenceCollector
from ditree.ownership import TRANSIENT_PLACEMENT, find_placement

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Registration:
    """A single registration: the class to build and its lifetime policy."""

    effective_type: LazyType
    lifetime: LifetimeHandler


def _type_name(service_type: Any) -> str:
    return getattr(service_type, "__qualname__", None) or repr(service_type)


class RegistrationStorage:
    """Store registrations of one scope and resolve instances from them.

    Storages form a chain: a child sees every registration of its parent and
    overrides them with its own, but never mutates the parent. Within one
    storage the most recently added registration of a service type wins for
    ``resolve`` while ``resolve_all`` returns every registration of the chain,
    ancestors first.

    A storage is not thread-safe. ``resolve`` and ``resolve_all`` may
    auto-register concrete types, so they mutate the storage and must not run
    concurrently with each other or with ``add_referenced_objects``.
    """

    def __init__(
        self,
        parent: RegistrationStorage | None = None,
        *,
        default_factory: InstanceFactory | None = None,
        autoregister_concrete_types: bool = True,
        dependencies_registry: DependenciesRegistry | None = None,
    ) -> None:
        """Create an empty storage.

        Call ``init_owner`` and then ``init_services`` once all registrations
        were added, before the first resolution.

        Args:
            parent: Storage of the enclosing scope, or ``None`` for a root.
                The parent must outlive this storage.
            default_factory: Factory a root storage falls back to. Ignored by
                child storages, which use their parent's factories.
            autoregister_concrete_types: Register unregistered concrete types
                on first use. Disable for strict mode.
            dependencies_registry: Registry of injection hooks. Children default
                to their parent's registry, roots to the shared one.

        """
        if dependencies_registry is None:
            dependencies_registry = (
                DEFAULT_DEPENDENCIES_REGISTRY if parent is None else parent.dependencies_registry
            )

        self._parent = parent
        self._default_factory = default_factory
        self._autoregister_concrete_types = autoregister_concrete_types
        self._autoregistration_policy = ConcreteTypeAutoregistrationPolicy()
        self._registrations: dict[Any, list[Registration]] = {}
        self._instance_factories: list[InstanceFactory] = []
        self._injection = InjectionDispatcher(dependencies_registry, self)
        self._owner: Any = None
        self._placement: Any = TRANSIENT_PLACEMENT

    @property
    def parent(self) -> RegistrationStorage | None:
        """Storage of the enclosing scope."""
        return self._parent

    @property
    def owner(self) -> Any:
        """Host object this storage is attached to."""
        return self._owner

    @property
    def placement(self) -> Any:
        """Object new instances are created in."""
        return self._placement

    @property
    def instance_factories(self) -> tuple[InstanceFactory, ...]:
        """Local factories, most recently registered first."""
        return tuple(self._instance_factories)

    @property
    def dependencies_registry(self) -> DependenciesRegistry:
        """Registry of injection hooks used by this storage."""
        return self._injection.registry

    # region Initialization
    def init_owner(self, owner: Any) -> None:
        """Attach the storage to ``owner`` and compute where new objects live.

        Args:
            owner: Host object owning the storage; its ``outer`` chain is
                searched for a long-lived scope.

        """
        self._owner = owner
        self._placement = find_placement(owner)

    def init_services(self) -> None:
        """Build the instance factory list.

        A root storage starts with its default factory. Factories registered as
        ``InstanceFactory`` services are appended, then the list is reversed so
        later registrations take priority.
        """
        if self._parent is None:
            # Children borrow the default factory from the root.
            self._instance_factories = [self._default_factory or DefaultInstanceFactory()]

        if InstanceFactory in self._registrations:
            # Registered factories are built by the factories collected so far.
            self._instance_factories.extend(self.resolve_all(InstanceFactory))

        self._instance_factories.reverse()
        logger.debug(
            "Registration storage initialized with %d instance factories (root=%s)",
            len(self._instance_factories),
            self._parent is None,
        )

    # endregion Initialization

    def add_registration(
        self,
        service_type: Any,
        effective_type: TypeSource,
        lifetime: LifetimeHandler,
    ) -> None:
        """Append a registration for ``service_type``.

        Registrations are never removed. The most recently added one wins for
        ``resolve``; all of them are returned by ``resolve_all``.

        Args:
            service_type: Key the implementation is registered under.
            effective_type: Concrete class, import path or loader of the class
                to instantiate.
            lifetime: Lifetime policy of this registration.

        """
        if not isinstance(lifetime, LifetimeHandler):
            msg = (
                f"Lifetime for {_type_name(service_type)} must be a LifetimeHandler, "
                f"got {lifetime!r}."
            )
            raise DITreeInvalidRegistrationError(msg)

        registration = Registration(effective_type=LazyType.of(effective_type), lifetime=lifetime)
        self._registrations.setdefault(service_type, []).append(registration)

    # region Resolution
    def resolve(self, service_type: type[T]) -> T:
        """Return an instance for ``service_type``.

        Raises:
            DITreeAbstractTypeNotRegisteredError: An abstract type is not
                registered anywhere in the scope chain.
            DITreeServiceNotRegisteredError: Strict mode and the concrete type
                is not registered.

        """
        registration = self._find_registration(service_type)
        if registration is None:
            registration = self._autoregister(service_type)
        return self._instantiate(registration)

    def resolve_all(self, service_type: type[T]) -> ObjectsCollection[T]:
        """Return every registration of ``service_type`` in the scope chain.

        Instances from ancestor scopes come first, each scope in registration
        order.

        Raises:
            DITreeServiceNotRegisteredError: No scope registered the type.

        """
        total = 0
        storage: RegistrationStorage | None = self
        while storage is not None:
            total += len(storage._registrations.get(service_type, ()))
            storage = storage._parent

        if total == 0:
            msg = f"Type {_type_name(service_type)} is not registered."
            raise DITreeServiceNotRegisteredError(msg)

        instances: list[Any] = []
        self._append_instances(service_type, instances)
        return ObjectsCollection(instances)

    def is_registered(self, service_type: Any) -> bool:
        """Return whether this storage or one of its parents registered ``service_type``."""
        storage: RegistrationStorage | None = self
        while storage is not None:
            if service_type in storage._registrations:
                return True
            storage = storage._parent
        return False

    def _find_registration(self, service_type: Any) -> Registration | None:
        storage: RegistrationStorage | None = self
        while storage is not None:
            registrations = storage._registrations.get(service_type)
            if registrations:
                return registrations[-1]
            storage = storage._parent
        return None

    def _autoregister(self, service_type: Any) -> Registration:
        if not self._autoregistration_policy.is_eligible_concrete(service_type):
            msg = (
                f"Type {_type_name(service_type)} is not registered and may not be auto "
                "registered. Only concrete, non-builtin classes may be auto registered."
            )
            raise DITreeAbstractTypeNotRegisteredError(msg)
        if not self._autoregister_concrete_types:
            msg = (
                f"Type {_type_name(service_type)} is not registered and autoregistration "
                "is disabled."
            )
            raise DITreeServiceNotRegisteredError(msg)

        lifetime = self._autoregistration_policy.lifetime_for(service_type)
        logger.debug(
            "Auto-registering %s with %s",
            _type_name(service_type),
            type(lifetime).__name__,
        )
        registration = Registration(effective_type=LazyType(service_type), lifetime=lifetime)
        self._registrations[service_type] = [registration]
        return registration

    def _append_instances(self, service_type: Any, instances: list[Any]) -> None:
        if self._parent is not None:
            self._parent._append_instances(service_type, instances)

        for registration in self._registrations.get(service_type, ()):
            instances.append(self._instantiate(registration))

    def _instantiate(self, registration: Registration) -> Any:
        instance = registration.lifetime.get()
        if instance is not None:
            return instance

        effective_type = registration.effective_type.load()
        factory = self.find_instance_factory(effective_type)

        instance = factory.create(self._placement, effective_type)
        if instance is None:
            msg = (
                f"{type(factory).__qualname__} returned None for {effective_type.__qualname__}. "
                "InstanceFactory.create must never return None."
            )
            raise DITreeFactoryReturnedNoneError(msg)
        logger.debug(
            "Created %s with %s",
            effective_type.__qualname__,
            type(factory).__qualname__,
        )

        self.inject(instance)
        factory.finalize_creation(instance)
        registration.lifetime.set(instance)
        return instance

    def find_instance_factory(self, concrete_type: type[Any]) -> InstanceFactory:
        """Return the factory that builds ``concrete_type``.

        Local factories are tried first, most recently registered first, then
        the parent storage is asked.

        Raises:
            DITreeNoInstanceFactoryError: No factory in the chain supports the class.

        """
        storage: RegistrationStorage | None = self
        while storage is not None:
            for factory in storage._instance_factories:
                if factory.is_supported(concrete_type):
                    return factory
            storage = storage._parent

        msg = f"No instance factory supports {concrete_type.__qualname__}."
        raise DITreeNoInstanceFactoryError(msg)

    # endregion Resolution

    # region Injection
    def inject(self, instance: Any) -> bool:
        """Inject dependencies into ``instance`` through its injection hooks.

        Returns:
            ``True`` when the instance's class declares at least one hook.

        """
        return self._injection.inject(instance)

    def can_inject(self, cls: type[Any]) -> bool:
        """Return whether instances of ``cls`` declare an injection hook."""
        return self._injection.can_inject(cls)

    # endregion Injection

    def add_referenced_objects(self, collector: ReferenceCollector) -> None:
        """Report every object this storage keeps alive to ``collector``.

        Covers instances cached by lifetime handlers, the instance factories
        and the owner of the parent storage.
        """
        for registrations in self._registrations.values():
            for registration in registrations:
                registration.lifetime.report_references(collector)

        for factory in self._instance_factories:
            factory.report_references(collector)

        if self._parent is not None and self._parent.owner is not None:
            collector.add_referenced_object(self._parent.owner)


__all__ = ["Registration", "RegistrationStorage"]
