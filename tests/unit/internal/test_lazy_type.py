from __future__ import annotations

from abc import ABC, abstractmethod

import pytest

from ditree.exceptions import DITreeEffectiveTypeError, DITreeInvalidRegistrationError
from ditree.lazy_type import LazyType


class Plugin:
    class Nested:
        pass


class AbstractPlugin(ABC):
    @abstractmethod
    def run(self) -> None: ...


def test_class_source_loads_itself() -> None:
    lazy = LazyType(Plugin)

    assert lazy.load() is Plugin
    assert lazy.is_loaded


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        (f"{__name__}:Plugin", Plugin),
        (f"{__name__}:Plugin.Nested", Plugin.Nested),
        (f"{__name__}.Plugin", Plugin),
    ],
)
def test_import_path_is_resolved(path: str, expected: type[object]) -> None:
    lazy = LazyType(path)

    assert not lazy.is_loaded
    assert lazy.load() is expected


def test_loader_is_called_once() -> None:
    calls: list[int] = []

    def loader() -> type[Plugin]:
        calls.append(1)
        return Plugin

    lazy = LazyType(loader)

    assert lazy.load() is Plugin
    assert lazy.load() is Plugin
    assert calls == [1]


def test_of_keeps_existing_lazy_type() -> None:
    lazy = LazyType(Plugin)

    assert LazyType.of(lazy) is lazy
    assert LazyType.of(Plugin).load() is Plugin


@pytest.mark.parametrize(
    "path",
    [
        "ditree_missing_module:Plugin",
        f"{__name__}:Missing",
        "Plugin",
    ],
)
def test_unresolvable_path_is_fatal(path: str) -> None:
    with pytest.raises(DITreeEffectiveTypeError):
        LazyType(path).load()


def test_loader_returning_non_class_is_fatal() -> None:
    with pytest.raises(DITreeEffectiveTypeError):
        LazyType(lambda: "Plugin").load()  # type: ignore[arg-type,return-value]


def test_abstract_class_is_fatal() -> None:
    with pytest.raises(DITreeEffectiveTypeError):
        LazyType(AbstractPlugin).load()


def test_invalid_source_is_rejected() -> None:
    with pytest.raises(DITreeInvalidRegistrationError):
        LazyType(42)  # type: ignore[arg-type]
