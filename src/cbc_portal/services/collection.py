"""Local list cache patched in place after successful mutations."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def _entity_id(item: BaseModel) -> Hashable:
    return getattr(item, "id")


class CollectionCache(Generic[T]):
    """Ordered entities keyed by ``key`` with insert/patch/remove primitives."""

    def __init__(self, key: Callable[[T], Hashable] = _entity_id) -> None:
        self._key = key
        self._items: list[T] = []

    @property
    def items(self) -> list[T]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return any(self._key(item) == key for item in self._items)

    def get(self, key: Hashable) -> T | None:
        for item in self._items:
            if self._key(item) == key:
                return item
        return None

    def replace(self, items: Iterable[T]) -> None:
        """Swap in a freshly loaded list."""
        self._items = list(items)

    def clear(self) -> None:
        self._items = []

    def insert(self, item: T, *, at_start: bool = True) -> None:
        """Add ``item``; an entry with the same key is replaced in place."""
        key = self._key(item)
        for index, existing in enumerate(self._items):
            if self._key(existing) == key:
                self._items[index] = item
                return
        if at_start:
            self._items.insert(0, item)
        else:
            self._items.append(item)

    def patch(self, key: Hashable, changes: Mapping[str, Any]) -> T | None:
        """Apply ``changes`` to the entry with ``key`` and return it."""
        for index, existing in enumerate(self._items):
            if self._key(existing) == key:
                updated = existing.model_copy(update=dict(changes))
                self._items[index] = updated
                return updated
        return None

    def remove(self, key: Hashable) -> T | None:
        """Drop the entry with ``key`` and return it."""
        for index, existing in enumerate(self._items):
            if self._key(existing) == key:
                return self._items.pop(index)
        return None
