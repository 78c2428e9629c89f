"""Insertion-ordered item storage."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator

from tilegrid.api.items import GridItem


class ItemStore:
    """Source of truth for which items exist on a grid."""

    def __init__(self, items: Iterable[GridItem] = ()) -> None:
        self._items: list[GridItem] = list(items)

    def __iter__(self) -> Iterator[GridItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return any(existing is item for existing in self._items)

    def __getitem__(self, index: int) -> GridItem:
        return self._items[index]

    def append(self, item: GridItem) -> None:
        self._items.append(item)

    def remove(self, item: GridItem) -> bool:
        """Drop an item by identity; return whether it was present."""
        index = self.index(item)
        if index < 0:
            return False
        del self._items[index]
        return True

    def index(self, item: GridItem) -> int:
        for index, existing in enumerate(self._items):
            if existing is item:
                return index
        return -1

    def find(self, item_id: Hashable) -> GridItem | None:
        """Return the first item carrying ``item_id``."""
        for item in self._items:
            if item.id is not None and item.id == item_id:
                return item
        return None

    def sort_by_position(self) -> None:
        """Stable sort by ``(y, x)``; unplaced items keep their order at the end."""
        self._items.sort(key=_position_key)

    def as_list(self) -> list[GridItem]:
        return list(self._items)


def _position_key(item: GridItem) -> tuple[int, int, int]:
    if not item.has_position:
        return (1, 0, 0)
    return (0, item.y, item.x)
