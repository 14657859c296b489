from __future__ import annotations

import datetime
import pathlib
import uuid
from abc import ABC, abstractmethod
from typing import Protocol

import pytest

from ditree._internal.autoregistration import ConcreteTypeAutoregistrationPolicy
from ditree._internal.type_checks import is_interface_like, is_protocol_class
from ditree.exceptions import DITreeAbstractTypeNotRegisteredError
from ditree.lifetimes import TransientLifetime
from ditree.storage import RegistrationStorage


class Concrete:
    pass


class Interface(ABC):
    @abstractmethod
    def run(self) -> None: ...


class Port(Protocol):
    def send(self) -> None: ...


class Adapter(Port):
    def send(self) -> None:
        pass


class Meta(type):
    pass


class Settings:
    """Configuration object; auto-registered like any other class."""

    debug = False


@pytest.mark.parametrize(
    ("candidate", "expected"),
    [
        (Concrete, True),
        (Adapter, True),
        (Interface, False),
        (Port, False),
        (Meta, False),
        ("Concrete", False),
        (list[int], False),
        (str, False),
        (int, False),
        (object, False),
        (pathlib.Path, False),
        (datetime.date, False),
        (uuid.UUID, False),
    ],
)
def test_is_eligible_concrete(candidate: object, expected: bool) -> None:
    policy = ConcreteTypeAutoregistrationPolicy()

    assert policy.is_eligible_concrete(candidate) is expected


def test_protocol_implementation_is_not_a_protocol() -> None:
    assert is_protocol_class(Port)
    assert not is_protocol_class(Adapter)
    assert not is_interface_like(Adapter)


def test_lifetime_is_always_transient() -> None:
    policy = ConcreteTypeAutoregistrationPolicy()

    first = policy.lifetime_for(Settings)
    second = policy.lifetime_for(Settings)

    assert isinstance(first, TransientLifetime)
    assert first is not second


def test_autoregistered_settings_are_transient(root_storage: RegistrationStorage) -> None:
    first = root_storage.resolve(Settings)
    second = root_storage.resolve(Settings)

    assert first is not second
    assert isinstance(root_storage._registrations[Settings][-1].lifetime, TransientLifetime)


@pytest.mark.parametrize("builtin_type", [str, int, dict])
def test_builtin_types_are_not_autoregistered(
    root_storage: RegistrationStorage,
    builtin_type: type[object],
) -> None:
    with pytest.raises(DITreeAbstractTypeNotRegisteredError):
        root_storage.resolve(builtin_type)

    assert not root_storage.is_registered(builtin_type)
