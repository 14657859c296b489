from __future__ import annotations

from typing import Any, TypeVar

from ditree._internal.type_checks import is_protocol_class, is_runtime_class
from ditree.collection import ObjectsCollection
from ditree.exceptions import DITreeInvalidRegistrationError
from ditree.factories import InstanceFactory
from ditree.hooks import DependenciesRegistry
from ditree.lazy_type import LazyType
from ditree.lifetimes import InstanceLifetime, Lifetime, LifetimeHandler, ReferenceCollector
from ditree.ownership import HostObject
from ditree.storage import RegistrationStorage

T = TypeVar("T")


class ObjectContainer(HostObject):
    """Host object owning one registration storage.

    Containers are built by ``ContainerBuilder``. Child containers are built
    with ``create_child_container`` and see every registration of their
    parent.

    Examples:
        .. code-block:: python

            builder = ContainerBuilder()
            builder.register_type(ConsoleLogger).as_(Logger).singleton()
            container = builder.build()

            logger = container.resolve(Logger)

    """

    def __init__(self, outer: Any = None, *, storage: RegistrationStorage) -> None:
        super().__init__(outer)
        self._storage = storage

    @property
    def storage(self) -> RegistrationStorage:
        """Registration storage backing this container."""
        return self._storage

    @property
    def parent(self) -> ObjectContainer | None:
        """Container of the enclosing scope."""
        parent_storage = self._storage.parent
        return None if parent_storage is None else parent_storage.owner

    def resolve(self, service_type: type[T]) -> T:
        """Return an instance for ``service_type``; see ``RegistrationStorage.resolve``."""
        return self._storage.resolve(service_type)

    def resolve_all(self, service_type: type[T]) -> ObjectsCollection[T]:
        """Return every registered instance for ``service_type``, ancestors first."""
        return self._storage.resolve_all(service_type)

    def is_registered(self, service_type: Any) -> bool:
        """Return whether ``service_type`` is registered in this scope chain."""
        return self._storage.is_registered(service_type)

    def inject(self, instance: Any) -> bool:
        """Inject dependencies into an object created outside the container."""
        return self._storage.inject(instance)

    def can_inject(self, cls: type[Any]) -> bool:
        """Return whether instances of ``cls`` declare an injection hook."""
        return self._storage.can_inject(cls)

    def add_referenced_objects(self, collector: ReferenceCollector) -> None:
        """Report objects kept alive by this container to a host collector."""
        self._storage.add_referenced_objects(collector)

    def create_child_container(self) -> ContainerBuilder:
        """Return a builder for a container scoped under this one."""
        return ContainerBuilder(parent=self)


class RegistrationBuilder:
    """Fluent description of one registration collected by ``ContainerBuilder``."""

    def __init__(
        self,
        effective_type: LazyType,
        *,
        default_service_type: Any = None,
        instance_lifetime: InstanceLifetime | None = None,
    ) -> None:
        self._effective_type = effective_type
        self._default_service_type = default_service_type
        self._instance_lifetime = instance_lifetime
        self._service_types: list[Any] = []
        self._lifetime = Lifetime.TRANSIENT

    def as_(self, service_type: Any) -> RegistrationBuilder:
        """Expose the registration under ``service_type``. May be repeated."""
        self._validate_service_type(service_type)
        self._service_types.append(service_type)
        return self

    def as_self(self) -> RegistrationBuilder:
        """Expose the registration under its own class."""
        return self.as_(self._own_service_type())

    def _own_service_type(self) -> Any:
        if self._default_service_type is None:
            msg = f"{self._effective_type!r} is not loaded yet; use as_() with an explicit type."
            raise DITreeInvalidRegistrationError(msg)
        return self._default_service_type

    def singleton(self) -> RegistrationBuilder:
        """Share one instance per container."""
        return self._with_lifetime(Lifetime.SINGLETON)

    def transient(self) -> RegistrationBuilder:
        """Build a new instance on every resolution. This is the default."""
        return self._with_lifetime(Lifetime.TRANSIENT)

    def _with_lifetime(self, lifetime: Lifetime) -> RegistrationBuilder:
        if self._instance_lifetime is not None:
            msg = "Registered instances always behave as singletons; lifetime cannot be changed."
            raise DITreeInvalidRegistrationError(msg)
        self._lifetime = lifetime
        return self

    def _validate_service_type(self, service_type: Any) -> None:
        implementation = self._default_service_type
        if not is_runtime_class(service_type) or not is_runtime_class(implementation):
            return
        if is_protocol_class(service_type):
            return
        if not issubclass(implementation, service_type):
            msg = (
                f"{implementation.__qualname__} cannot be registered as "
                f"{service_type.__qualname__}: it is not a subclass."
            )
            raise DITreeInvalidRegistrationError(msg)

    def apply(self, storage: RegistrationStorage) -> None:
        """Add the described registration to ``storage``."""
        service_types = self._service_types or [self._own_service_type()]

        # One handler for every exposed type, so they share cached instances.
        lifetime: LifetimeHandler = self._instance_lifetime or self._lifetime.create_handler()
        for service_type in service_types:
            storage.add_registration(service_type, self._effective_type, lifetime)


class ContainerBuilder:
    """Collect registrations and build an ``ObjectContainer`` from them."""

    def __init__(
        self,
        parent: ObjectContainer | None = None,
        *,
        default_factory: InstanceFactory | None = None,
        autoregister_concrete_types: bool = True,
        dependencies_registry: DependenciesRegistry | None = None,
    ) -> None:
        """Start a new builder.

        Args:
            parent: Container of the enclosing scope, if any.
            default_factory: Factory used by a root container when no
                registered factory supports a class.
            autoregister_concrete_types: Auto-register unregistered concrete
                classes on first resolution.
            dependencies_registry: Registry of injection hooks; inherited from
                the parent when omitted.

        """
        self._parent = parent
        self._default_factory = default_factory
        self._autoregister_concrete_types = autoregister_concrete_types
        self._dependencies_registry = dependencies_registry
        self._registrations: list[RegistrationBuilder] = []

    def register_type(self, cls: type[Any]) -> RegistrationBuilder:
        """Register a concrete class; exposed as itself unless ``as_`` is used."""
        if not is_runtime_class(cls):
            msg = f"register_type expects a class, got {cls!r}."
            raise DITreeInvalidRegistrationError(msg)
        return self._add(RegistrationBuilder(LazyType(cls), default_service_type=cls))

    def register_lazy(self, source: Any) -> RegistrationBuilder:
        """Register a class loaded on first use from an import path or loader.

        The service type cannot be inferred, so ``as_`` is required.
        """
        return self._add(RegistrationBuilder(LazyType.of(source)))

    def register_instance(self, instance: Any) -> RegistrationBuilder:
        """Register an existing object; exposed as its class unless ``as_`` is used."""
        return self._add(
            RegistrationBuilder(
                LazyType(type(instance)),
                default_service_type=type(instance),
                instance_lifetime=InstanceLifetime(instance),
            ),
        )

    def _add(self, registration: RegistrationBuilder) -> RegistrationBuilder:
        self._registrations.append(registration)
        return registration

    def build(self, outer: Any = None) -> ObjectContainer:
        """Create the container and initialize its storage.

        Args:
            outer: Owner of the new container. Defaults to the parent container.

        """
        parent_storage = None if self._parent is None else self._parent.storage
        storage = RegistrationStorage(
            parent_storage,
            default_factory=self._default_factory,
            autoregister_concrete_types=self._autoregister_concrete_types,
            dependencies_registry=self._dependencies_registry,
        )
        for registration in self._registrations:
            registration.apply(storage)

        container = ObjectContainer(outer if outer is not None else self._parent, storage=storage)
        storage.init_owner(container)
        storage.init_services()
        return container


__all__ = ["ContainerBuilder", "ObjectContainer", "RegistrationBuilder"]
