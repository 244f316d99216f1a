"""Prepend List - most-recent-first sequence used for every nested aggregate collection.

Invariants:
    - prepend() is the only insertion path; newest item is always at index 0
    - Membership and removal are predicate-based, O(n), never by position
    - Iteration order is display order

Design Decisions:
    - Explicit container over bare list: likes, comments, experience and education
      share one insertion/removal vocabulary instead of ad-hoc list surgery
"""

from typing import Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


class PrependList(Generic[T]):
    """Ordered container with most-recent-first insertion."""

    def __init__(self, items: Iterable[T] = ()):
        self._items: list[T] = list(items)

    def prepend(self, item: T) -> None:
        self._items.insert(0, item)

    def find(self, predicate: Callable[[T], bool]) -> T | None:
        for item in self._items:
            if predicate(item):
                return item
        return None

    def any(self, predicate: Callable[[T], bool]) -> bool:
        return self.find(predicate) is not None

    def remove_where(self, predicate: Callable[[T], bool]) -> int:
        """Remove every matching item. Returns how many were removed."""
        kept = [item for item in self._items if not predicate(item)]
        removed = len(self._items) - len(kept)
        self._items = kept
        return removed

    def to_list(self) -> list[T]:
        return list(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PrependList):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"PrependList({self._items!r})"
