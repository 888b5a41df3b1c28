"""Lazily loaded child collections with an explicit loaded/not-loaded state."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar, Union, overload

T = TypeVar("T")


class ReadOnlyList(Sequence[T]):
    """A live, read-only view over a cache's list."""

    __slots__ = ("_items",)

    def __init__(self, items: list[T]) -> None:
        self._items = items

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index: int | slice) -> T | list[T]:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ReadOnlyList):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ReadOnlyList({self._items!r})"


@dataclass(frozen=True)
class NotLoaded:
    """The collection has not been fetched yet."""


@dataclass(frozen=True)
class Loaded(Generic[T]):
    """The collection has been fetched; ``view`` is handed out to callers."""

    items: list[T]
    view: ReadOnlyList[T] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "view", ReadOnlyList(self.items))


CacheState = Union[NotLoaded, Loaded[T]]

NOT_LOADED = NotLoaded()


class ChildCache(Generic[T]):
    """Children of a resource, fetched by *loader* on first read."""

    def __init__(self, loader: Callable[[], list[T]]) -> None:
        self._loader = loader
        self._state: CacheState[T] = NOT_LOADED

    @property
    def state(self) -> CacheState[T]:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return isinstance(self._state, Loaded)

    def _loaded(self) -> Loaded[T]:
        if isinstance(self._state, NotLoaded):
            self._state = Loaded(list(self._loader()))
        return self._state

    def get(self) -> ReadOnlyList[T]:
        """Return the children, loading them if necessary."""
        return self._loaded().view

    def append(self, item: T) -> None:
        self._loaded().items.append(item)

    def remove(self, item: T) -> None:
        # nothing to amend if the next read reloads anyway
        if isinstance(self._state, Loaded) and item in self._state.items:
            self._state.items.remove(item)

    def replace(self, items: list[T]) -> ReadOnlyList[T]:
        self._state = Loaded(list(items))
        return self._state.view

    def reset(self) -> None:
        self._state = NOT_LOADED
