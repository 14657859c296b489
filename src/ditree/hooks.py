from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass, field
from inspect import Parameter
from typing import Annotated, Any, get_args, get_origin, get_type_hints

from ditree.exceptions import DITreeInjectionSignatureError
from ditree.resolver import Resolver

NATIVE_HOOK_NAME = "init_dependencies"
SCRIPTED_HOOK_NAME = "inject_dependencies"

NativeHook = Callable[[Any, Resolver], None]
"""``hook(instance, resolver)``; pulls dependencies through the resolver."""

ScriptedHook = Callable[..., None]
"""``hook(instance, dep_a, dep_b, ...)``; dependencies are taken from annotations."""

_POSITIONAL_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True, slots=True)
class HookParameter:
    """One scripted hook parameter and the service type resolved for it."""

    name: str
    service_type: Any
    keyword_only: bool


@dataclass(slots=True)
class InjectionHooks:
    """Initialization entry points discovered for one concrete class."""

    owner: type[Any]
    native: NativeHook | None = None
    scripted: ScriptedHook | None = None
    _parameters: tuple[HookParameter, ...] | None = field(default=None, repr=False)
    _signature: inspect.Signature | None = field(default=None, repr=False)

    @property
    def is_empty(self) -> bool:
        """Whether the class has no entry point at all."""
        return self.native is None and self.scripted is None

    def scripted_parameters(self) -> tuple[HookParameter, ...]:
        """Return the scripted hook parameters, computing them on first use.

        Raises:
            DITreeInjectionSignatureError: A parameter is variadic or has no
                usable type annotation.

        """
        if self._parameters is None:
            if self.scripted is None:
                self._parameters = ()
            else:
                self._parameters = _extract_parameters(self.owner, self.scripted)
        return self._parameters

    def build_arguments(self, resolver: Resolver) -> tuple[list[Any], dict[str, Any]]:
        """Resolve every scripted parameter and lay them out as call arguments.

        Raises:
            DITreeInjectionSignatureError: The prepared arguments do not fit the
                scripted hook's signature.

        """
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter in self.scripted_parameters():
            value = resolver.resolve(parameter.service_type)
            if parameter.keyword_only:
                kwargs[parameter.name] = value
            else:
                args.append(value)

        if self.scripted is not None:
            self._check_layout(args, kwargs)
        return args, kwargs

    def _check_layout(self, args: list[Any], kwargs: dict[str, Any]) -> None:
        hook_name = f"{self.owner.__qualname__}.{SCRIPTED_HOOK_NAME}"
        try:
            if self._signature is None:
                self._signature = inspect.signature(self.scripted)  # type: ignore[arg-type]
            # None stands in for the instance bound to the first parameter.
            self._signature.bind(None, *args, **kwargs)
        except (TypeError, ValueError) as error:
            msg = (
                f"Arguments prepared for injection hook {hook_name} do not match its "
                f"signature: {error}."
            )
            raise DITreeInjectionSignatureError(msg) from error


def _unwrap_annotated(annotation: Any) -> Any:
    if get_origin(annotation) is Annotated:
        return get_args(annotation)[0]
    return annotation


def _extract_parameters(owner: type[Any], hook: ScriptedHook) -> tuple[HookParameter, ...]:
    hook_name = f"{owner.__qualname__}.{getattr(hook, '__name__', SCRIPTED_HOOK_NAME)}"
    try:
        signature = inspect.signature(hook)
        hints = get_type_hints(hook, include_extras=True)
    except (NameError, TypeError, ValueError) as error:
        msg = f"Cannot read the signature of injection hook {hook_name}: {error}."
        raise DITreeInjectionSignatureError(msg) from error

    # The first parameter receives the instance.
    parameters = list(signature.parameters.values())[1:]
    result: list[HookParameter] = []
    for parameter in parameters:
        if parameter.kind in (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD):
            msg = (
                f"Injection hook {hook_name} cannot declare variadic parameter "
                f"'{parameter.name}'."
            )
            raise DITreeInjectionSignatureError(msg)
        annotation = hints.get(parameter.name, Parameter.empty)
        if annotation is Parameter.empty:
            msg = (
                f"Parameter '{parameter.name}' of injection hook {hook_name} "
                "has no type annotation."
            )
            raise DITreeInjectionSignatureError(msg)
        result.append(
            HookParameter(
                name=parameter.name,
                service_type=_unwrap_annotated(annotation),
                keyword_only=parameter.kind not in _POSITIONAL_KINDS,
            ),
        )
    return tuple(result)


class DependenciesRegistry:
    """Map concrete classes to their injection entry points.

    Hooks are either registered explicitly with ``register`` or discovered
    once per class from the ``init_dependencies`` (native) and
    ``inject_dependencies`` (scripted) methods. Each hook is taken from the
    nearest class in the MRO that provides it. Explicit registrations apply to
    subclasses too and, on the same class, win over its conventional method.
    """

    def __init__(self) -> None:
        self._explicit: dict[type[Any], tuple[NativeHook | None, ScriptedHook | None]] = {}
        self._hooks: dict[type[Any], InjectionHooks] = {}

    def register(
        self,
        cls: type[Any],
        *,
        native: NativeHook | None = None,
        scripted: ScriptedHook | None = None,
    ) -> None:
        """Register injection entry points for ``cls`` explicitly.

        Args:
            cls: Class whose instances receive the hooks.
            native: Hook called first with ``(instance, resolver)``.
            scripted: Hook called second with resolved, annotated arguments.

        """
        self._explicit[cls] = (native, scripted)
        # Subclasses may have cached hooks inherited from cls.
        self._hooks.clear()

    def find(self, cls: type[Any]) -> InjectionHooks:
        """Return the injection hooks of ``cls``, discovering them on first use."""
        hooks = self._hooks.get(cls)
        if hooks is None:
            hooks = self._discover(cls)
            self._hooks[cls] = hooks
        return hooks

    def _discover(self, cls: type[Any]) -> InjectionHooks:
        native: NativeHook | None = None
        scripted: ScriptedHook | None = None
        native_found = scripted_found = False
        for base in cls.__mro__:
            explicit_native, explicit_scripted = self._explicit.get(base, (None, None))
            if not native_found:
                native_found, native = _own_hook(base, NATIVE_HOOK_NAME, explicit_native)
            if not scripted_found:
                scripted_found, scripted = _own_hook(base, SCRIPTED_HOOK_NAME, explicit_scripted)
            if native_found and scripted_found:
                break
        return InjectionHooks(owner=cls, native=native, scripted=scripted)


def _own_hook(
    base: type[Any],
    name: str,
    explicit: Callable[..., None] | None,
) -> tuple[bool, Callable[..., None] | None]:
    """Return whether ``base`` decides the hook ``name``, and the hook it provides.

    An explicit registration on ``base`` wins over the method ``base`` defines.
    A static or class method, or a non-callable attribute, hides the hooks of
    further bases.
    """
    if explicit is not None:
        return True, explicit
    if name not in vars(base):
        return False, None
    hook = vars(base)[name]
    if isinstance(hook, staticmethod | classmethod) or not callable(hook):
        return True, None
    return True, hook


DEFAULT_DEPENDENCIES_REGISTRY = DependenciesRegistry()
"""Registry used by storages that were not given one explicitly."""


class InjectionDispatcher:
    """Invoke the injection entry points of instances."""

    def __init__(self, registry: DependenciesRegistry, resolver: Resolver) -> None:
        self._registry = registry
        self._resolver = resolver

    @property
    def registry(self) -> DependenciesRegistry:
        """Registry the hooks are looked up in."""
        return self._registry

    def inject(self, instance: Any) -> bool:
        """Run the native hook, then the scripted hook, of ``instance``.

        Returns:
            ``True`` when at least one hook was invoked.

        """
        hooks = self._registry.find(type(instance))
        if hooks.native is not None:
            hooks.native(instance, self._resolver)

        if hooks.scripted is not None:
            args, kwargs = hooks.build_arguments(self._resolver)
            hooks.scripted(instance, *args, **kwargs)

        return not hooks.is_empty

    def can_inject(self, cls: type[Any]) -> bool:
        """Return whether ``cls`` declares any injection hook, without invoking it."""
        return not self._registry.find(cls).is_empty


__all__ = [
    "DEFAULT_DEPENDENCIES_REGISTRY",
    "NATIVE_HOOK_NAME",
    "SCRIPTED_HOOK_NAME",
    "DependenciesRegistry",
    "HookParameter",
    "InjectionDispatcher",
    "InjectionHooks",
    "NativeHook",
    "ScriptedHook",
]
