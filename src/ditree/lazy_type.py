from __future__ import annotations

import importlib
from collections.abc import Callable
from typing import Any, TypeAlias

from ditree._internal.type_checks import is_interface_like, is_runtime_class
from ditree.exceptions import DITreeEffectiveTypeError, DITreeInvalidRegistrationError

TypeSource: TypeAlias = "type[Any] | str | Callable[[], type[Any]] | LazyType"
"""Anything accepted as an effective type: a class, ``"pkg.module:Name"`` or a loader."""

_UNRESOLVED: Any = object()


class LazyType:
    """Reference to a concrete class that is loaded on first use.

    The source is one of:

    * a class, returned as is;
    * an import path ``"package.module:QualName"`` (``"package.module.Name"``
      is accepted as well), imported with ``importlib``;
    * a zero-argument callable returning the class.

    The result is memoized, so the source is evaluated at most once.
    """

    __slots__ = ("_loaded", "_source")

    def __init__(self, source: type[Any] | str | Callable[[], type[Any]]) -> None:
        if not (is_runtime_class(source) or isinstance(source, str) or callable(source)):
            msg = f"Effective type must be a class, an import path or a loader, got {source!r}."
            raise DITreeInvalidRegistrationError(msg)
        self._source = source
        self._loaded: Any = _UNRESOLVED

    @classmethod
    def of(cls, source: TypeSource) -> LazyType:
        """Wrap ``source`` unless it already is a ``LazyType``."""
        if isinstance(source, LazyType):
            return source
        return cls(source)

    @property
    def is_loaded(self) -> bool:
        """Whether the class has been resolved already."""
        return self._loaded is not _UNRESOLVED

    def load(self) -> type[Any]:
        """Return the concrete class, loading it if needed.

        Raises:
            DITreeEffectiveTypeError: The source cannot be imported, does not
                produce a class, or produces an abstract class.

        """
        if self._loaded is _UNRESOLVED:
            self._loaded = self._validate(self._load_source())
        return self._loaded

    def _load_source(self) -> Any:
        source = self._source
        if is_runtime_class(source):
            return source
        if isinstance(source, str):
            return _import_path(source)
        return source()  # type: ignore[operator]

    def _validate(self, loaded: Any) -> type[Any]:
        if not is_runtime_class(loaded):
            msg = f"Effective type {self!r} resolved to {loaded!r}, which is not a class."
            raise DITreeEffectiveTypeError(msg)
        if is_interface_like(loaded):
            msg = f"Effective type {loaded.__qualname__} is abstract and cannot be instantiated."
            raise DITreeEffectiveTypeError(msg)
        return loaded

    def __repr__(self) -> str:
        if self.is_loaded:
            return f"LazyType({self._loaded.__qualname__})"
        return f"LazyType({self._source!r})"


def _import_path(path: str) -> Any:
    if ":" in path:
        module_name, _, qualname = path.partition(":")
    else:
        module_name, _, qualname = path.rpartition(".")
    if not module_name or not qualname:
        msg = f"Invalid import path {path!r}; expected 'package.module:Name'."
        raise DITreeEffectiveTypeError(msg)

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as error:
        msg = f"Cannot import module {module_name!r} for effective type {path!r}."
        raise DITreeEffectiveTypeError(msg) from error

    for attribute in qualname.split("."):
        try:
            target = getattr(target, attribute)
        except AttributeError as error:
            msg = f"Module {module_name!r} has no attribute {qualname!r}."
            raise DITreeEffectiveTypeError(msg) from error
    return target


__all__ = ["LazyType", "TypeSource"]
