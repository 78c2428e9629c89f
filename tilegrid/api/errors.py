"""Grid error taxonomy and placement outcome values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tilegrid.api.items import GridItem


class GridError(Exception):
    """Base class for grid engine errors."""


class BoundsExceeded(GridError):
    """Placement would exceed a configured maximum and the grid cannot grow."""


class InvalidPosition(GridError):
    """A move target is missing required coordinates."""


class InvalidDimensions(GridError):
    """A resize target is missing required spans."""


class UnresolvableConflict(GridError):
    """No configured strategy could place the item."""


class MissingCapability(GridError):
    """An optional capability was used without being injected."""


@dataclass(frozen=True, slots=True)
class PlacementResult:
    """Outcome of a placement-affecting mutation."""

    ok: bool
    item: GridItem | None = None
    error: GridError | None = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def placed(cls, item: GridItem) -> PlacementResult:
        return cls(ok=True, item=item)

    @classmethod
    def failed(cls, item: GridItem | None, error: GridError) -> PlacementResult:
        return cls(ok=False, item=item, error=error)


__all__ = [
    "BoundsExceeded",
    "GridError",
    "InvalidDimensions",
    "InvalidPosition",
    "MissingCapability",
    "PlacementResult",
    "UnresolvableConflict",
]
