from __future__ import annotations

import datetime
import decimal
import pathlib
import uuid
from dataclasses import dataclass
from typing import Any, TypeGuard

from ditree._internal.type_checks import is_interface_like
from ditree.lifetimes import LifetimeHandler, TransientLifetime


@dataclass(frozen=True, slots=True)
class ConcreteTypeAutoregistrationPolicy:
    """Internal policy for concrete-type autoregistration eligibility."""

    ignored_base_types: tuple[type[Any], ...] = (
        pathlib.PurePath,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        uuid.UUID,
        decimal.Decimal,
    )

    def is_eligible_concrete(self, candidate: object) -> TypeGuard[type[Any]]:
        """Return true when a candidate can be auto-registered as its own effective type.

        Args:
            candidate: Service key requested without a registration.

        """
        if is_interface_like(candidate):
            return False
        if candidate.__module__ == "builtins":  # type: ignore[union-attr]
            return False
        if issubclass(candidate, type):  # type: ignore[arg-type]
            return False
        return not issubclass(candidate, self.ignored_base_types)  # type: ignore[arg-type]

    def lifetime_for(self, concrete_type: type[Any]) -> LifetimeHandler:
        """Return a fresh lifetime handler for an auto-registered type.

        Every auto-registered type is transient.

        Args:
            concrete_type: Class being auto-registered.

        """
        return TransientLifetime()
