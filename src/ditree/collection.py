from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from types import TracebackType
from typing import Any, TypeVar, overload

from typing_extensions import Self

T = TypeVar("T")


class ObjectsCollection(Sequence[T]):
    """Owned, read-only sequence of instances produced by bulk resolution.

    The collection is the only owner of its item buffer. ``release`` drops the
    buffer exactly once; later calls are no-ops and the collection then
    behaves as empty. Using it as a context manager releases it on exit.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: tuple[T, ...] | None = tuple(items)

    @property
    def is_released(self) -> bool:
        """Whether the backing buffer has been dropped."""
        return self._items is None

    def release(self) -> None:
        """Drop the backing buffer."""
        self._items = None

    def _buffer(self) -> tuple[T, ...]:
        return self._items if self._items is not None else ()

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[T, ...]: ...

    def __getitem__(self, index: int | slice) -> T | tuple[T, ...]:
        return self._buffer()[index]

    def __len__(self) -> int:
        return len(self._buffer())

    def __iter__(self) -> Iterator[T]:
        return iter(self._buffer())

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.release()

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ObjectsCollection):
            return self._buffer() == other._buffer()
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.is_released:
            return "ObjectsCollection(<released>)"
        return f"ObjectsCollection({list(self._buffer())!r})"


__all__ = ["ObjectsCollection"]
