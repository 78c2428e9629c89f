"""Grid item and derived display value types."""

from __future__ import annotations

from collections.abc import Hashable
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False, slots=True, weakref_slot=True)
class GridItem:
    """One rectangle owned by a grid's item store.

    Items compare by identity. ``x`` and ``y`` stay ``None`` until placement
    assigns a position; an item that carries both is placed where it asks to be.
    """

    w: int = 1
    h: int = 1
    x: int | None = None
    y: int | None = None
    id: Hashable | None = None
    data: Any = None
    display_item: DisplayItem | None = field(default=None, repr=False)

    @property
    def has_position(self) -> bool:
        return self.x is not None and self.y is not None

    @property
    def position(self) -> Position | None:
        if not self.has_position:
            return None
        return Position(x=self.x, y=self.y)

    def shares_identity(self, other: GridItem) -> bool:
        """Return whether ``other`` is this item or carries the same id."""
        if other is self:
            return True
        return self.id is not None and other.id is not None and self.id == other.id

    def __deepcopy__(self, memo: dict[int, Any]) -> GridItem:
        clone = GridItem(
            w=self.w,
            h=self.h,
            x=self.x,
            y=self.y,
            id=deepcopy(self.id, memo),
            data=deepcopy(self.data, memo),
        )
        memo[id(self)] = clone
        return clone


@dataclass(slots=True)
class DisplayItem:
    """Pixel-space projection of a grid item."""

    grid_item: GridItem = field(repr=False)
    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True, slots=True)
class Position:
    """Logical cell coordinate."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Dimensions:
    """Logical cell span."""

    w: int
    h: int


@dataclass(frozen=True, slots=True)
class PixelPoint:
    """Pixel coordinate, usually relative to the display container."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class DisplayFit:
    """Result of probing a display position against the grid."""

    pos: Position
    fits: bool
    conflicts: tuple[GridItem, ...] = ()


__all__ = ["DisplayFit", "DisplayItem", "Dimensions", "GridItem", "PixelPoint", "Position"]
