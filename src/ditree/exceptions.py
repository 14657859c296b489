class DITreeError(Exception):
    """Represent a base class for all DITree-specific failures.

    Catch this type when you want to handle any DITree error path without
    matching each concrete exception class individually.
    """


class DITreeConfigurationError(DITreeError):
    """Signal a registration or wiring mistake made by the container user.

    Configuration errors are never transient. They mean the container was
    wired incorrectly and the failing operation must be aborted.
    """


class DITreeAbstractTypeNotRegisteredError(DITreeConfigurationError):
    """Signal that an abstract service type has no registration anywhere.

    Raised by ``resolve`` when neither the storage nor any of its parents
    registered the requested abstract class, protocol or non-class key.
    Abstract keys are never auto-registered.

    Typical fix is registering a concrete implementation for the key in the
    storage or in one of its ancestors.
    """


class DITreeServiceNotRegisteredError(DITreeConfigurationError):
    """Signal that a service type has no registration in the scope chain.

    Raised by ``resolve_all`` when no scope registered the key (an empty
    result is treated as a usage error) and by ``resolve`` in strict mode
    (``autoregister_concrete_types=False``).
    """


class DITreeFactoryReturnedNoneError(DITreeConfigurationError):
    """Signal that an instance factory produced no instance.

    ``InstanceFactory.create`` must always return a live object. Check the
    project specific factory implementation.
    """


class DITreeEffectiveTypeError(DITreeConfigurationError):
    """Signal that an effective type could not be resolved to a concrete class.

    Raised when a lazy type reference points to a missing module or attribute,
    yields something that is not a class, or yields an abstract class.
    """


class DITreeInvalidRegistrationError(DITreeConfigurationError):
    """Signal invalid arguments passed to registration APIs.

    Raised by ``RegistrationStorage.add_registration`` and by
    ``ContainerBuilder`` when a registration is incomplete or malformed.
    """


class DITreeInternalError(DITreeError):
    """Signal a broken internal invariant.

    These errors are never expected in correct operation.
    """


class DITreeInjectionSignatureError(DITreeInternalError):
    """Signal that a scripted injection hook cannot be called with resolved arguments.

    Every parameter of ``inject_dependencies`` must be a plain annotated
    parameter so that the bound arguments match the parameter list exactly.
    """


class DITreeNoInstanceFactoryError(DITreeInternalError):
    """Signal that no instance factory in the scope chain supports a class.

    The root storage always carries the default factory, so this means the
    default factory was replaced with one that rejects the class.
    """
