from ditree.collection import ObjectsCollection
from ditree.container import ContainerBuilder, ObjectContainer, RegistrationBuilder
from ditree.exceptions import (
    DITreeAbstractTypeNotRegisteredError,
    DITreeConfigurationError,
    DITreeEffectiveTypeError,
    DITreeError,
    DITreeFactoryReturnedNoneError,
    DITreeInjectionSignatureError,
    DITreeInternalError,
    DITreeInvalidRegistrationError,
    DITreeNoInstanceFactoryError,
    DITreeServiceNotRegisteredError,
)
from ditree.factories import DefaultInstanceFactory, InstanceFactory
from ditree.hooks import DEFAULT_DEPENDENCIES_REGISTRY, DependenciesRegistry
from ditree.lazy_type import LazyType
from ditree.lifetimes import (
    CollectedReferences,
    InstanceLifetime,
    Lifetime,
    LifetimeHandler,
    ReferenceCollector,
    SingletonLifetime,
    TransientLifetime,
)
from ditree.ownership import TRANSIENT_PLACEMENT, HostObject
from ditree.resolver import Resolver
from ditree.storage import RegistrationStorage

__all__ = [
    "DEFAULT_DEPENDENCIES_REGISTRY",
    "TRANSIENT_PLACEMENT",
    "CollectedReferences",
    "ContainerBuilder",
    "DITreeAbstractTypeNotRegisteredError",
    "DITreeConfigurationError",
    "DITreeEffectiveTypeError",
    "DITreeError",
    "DITreeFactoryReturnedNoneError",
    "DITreeInjectionSignatureError",
    "DITreeInternalError",
    "DITreeInvalidRegistrationError",
    "DITreeNoInstanceFactoryError",
    "DITreeServiceNotRegisteredError",
    "DefaultInstanceFactory",
    "DependenciesRegistry",
    "HostObject",
    "InstanceFactory",
    "InstanceLifetime",
    "LazyType",
    "Lifetime",
    "LifetimeHandler",
    "ObjectContainer",
    "ObjectsCollection",
    "ReferenceCollector",
    "RegistrationBuilder",
    "RegistrationStorage",
    "Resolver",
    "SingletonLifetime",
    "TransientLifetime",
]
