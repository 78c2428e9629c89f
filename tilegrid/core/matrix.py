"""Numpy-backed occupancy matrix: placement, growth and conflict queries."""

from __future__ import annotations

import logging
import weakref
from typing import Literal

import numpy as np

from tilegrid.api.errors import (
    BoundsExceeded,
    InvalidDimensions,
    PlacementResult,
    UnresolvableConflict,
)
from tilegrid.api.items import GridItem, Position
from tilegrid.api.settings import GridSettings
from tilegrid.core.strategies import StrategyRegistry, default_registry

_LOG = logging.getLogger("tilegrid.matrix")

EMPTY = 0
FitResult = bool | list[GridItem]


class GridMatrix:
    """Rows x cols cell matrix; each cell is empty or holds an item's slot id.

    Slot ids are assigned per item on first placement and stay stable until
    ``reset``. The matrix only keeps weak references to items; the owning
    ``ItemStore`` controls their lifetime.
    """

    def __init__(
        self,
        settings: GridSettings,
        strategies: StrategyRegistry | None = None,
    ) -> None:
        self.settings = settings
        self.strategies = strategies if strategies is not None else default_registry()
        self._cells = np.zeros((0, 0), dtype=np.int32)
        self._items_by_slot: weakref.WeakValueDictionary[int, GridItem] = (
            weakref.WeakValueDictionary()
        )
        self._slot_by_item: weakref.WeakKeyDictionary[GridItem, int] = weakref.WeakKeyDictionary()
        self._next_slot = 1
        self.reset()

    # -- extent ---------------------------------------------------------

    def row_count(self, current_only: bool = False) -> int:
        """Return effective row count, or the backing extent with ``current_only``."""
        current = int(self._cells.shape[0])
        if current_only:
            return current
        if self.settings.fill_max and self.settings.max_rows:
            return self.settings.max_rows
        if current > 0:
            return current
        return self.settings.min_rows

    def col_count(self, current_only: bool = False) -> int:
        """Return effective column count, or the backing extent with ``current_only``."""
        current = int(self._cells.shape[1]) if self._cells.shape[0] > 0 else 0
        if current_only:
            return current
        if self.settings.fill_max and self.settings.max_cols:
            return self.settings.max_cols
        if current > 0:
            return current
        return self.settings.min_cols

    def reset(self) -> None:
        """Discard every cell and allocate the effective empty extent."""
        self._cells = np.zeros((0, 0), dtype=np.int32)
        self._items_by_slot.clear()
        self._slot_by_item.clear()
        self._next_slot = 1
        rows = self.row_count()
        cols = self.col_count()
        self._cells = np.zeros((rows, cols if rows > 0 else 0), dtype=np.int32)

    def add_row(self) -> bool:
        """Append one empty row; refuse past a configured max."""
        rows = self.row_count(current_only=True) + 1
        if self.settings.max_rows and rows > self.settings.max_rows:
            return False
        cols = max(self.col_count(), int(self._cells.shape[1]))
        grown = np.zeros((rows, cols), dtype=np.int32)
        grown[: rows - 1, : self._cells.shape[1]] = self._cells
        self._cells = grown
        return True

    def add_col(self) -> bool:
        """Append one empty column; refuse past a configured max."""
        cols = self.col_count(current_only=True) + 1
        if self.settings.max_cols and cols > self.settings.max_cols:
            return False
        rows = self.row_count(current_only=True) or self.row_count()
        grown = np.zeros((rows, cols), dtype=np.int32)
        old_rows, old_cols = self._cells.shape
        grown[:old_rows, :old_cols] = self._cells
        self._cells = grown
        return True

    def grow(self, axis: Literal["rows", "cols"]) -> bool:
        if axis == "rows":
            return self.add_row()
        if axis == "cols":
            return self.add_col()
        raise ValueError(f"unknown grid axis: {axis!r}")

    # -- queries --------------------------------------------------------

    def fits(
        self,
        item: GridItem,
        pos: Position | None = None,
        *,
        report_conflicts: bool = True,
    ) -> FitResult:
        """Check a candidate footprint.

        Returns ``True`` when free, ``False`` when out of bounds (or conflicting
        with ``report_conflicts`` off), else the distinct conflicting items in
        row-major order of first contact. Never returns an empty list.
        """
        x, y = self._candidate(item, pos)
        if x < 0 or y < 0:
            return False
        if self.settings.max_rows and y + item.h > self.settings.max_rows:
            return False
        if self.settings.max_cols and x + item.w > self.settings.max_cols:
            return False

        # Slicing past the backing extent truncates, so undefined cells never conflict.
        region = self._cells[y : y + item.h, x : x + item.w]
        conflicts: list[GridItem] = []
        for slot in dict.fromkeys(region.ravel().tolist()):
            if slot == EMPTY:
                continue
            other = self._items_by_slot.get(slot)
            if other is None or item.shares_identity(other):
                continue
            conflicts.append(other)

        if conflicts:
            return conflicts if report_conflicts else False
        return True

    def find_empty_position(
        self,
        item: GridItem,
        *,
        start: Position | None = None,
        return_pos: bool = False,
    ) -> Position | bool:
        """First-fit row-major scan for a free footprint.

        Starts at ``start`` (else the item's position, else the origin); the
        first row resumes at the start column and later rows begin at column 0.
        When a candidate conflicts, the cursor jumps past the width of the
        first reported conflict. That skip is a heuristic: with several
        conflicts of differing widths it can step over a valid position.
        """
        start_x, start_y = self._candidate(item, start)
        end_y = self.settings.max_rows or self.row_count() + 1
        end_x = self.settings.max_cols or self.col_count() + 1

        for y in range(max(start_y, 0), end_y):
            x = max(start_x, 0) if y == start_y else 0
            while x < end_x:
                candidate = Position(x=x, y=y)
                fit = self.fits(item, candidate)
                if fit is True:
                    if return_pos:
                        return candidate
                    item.x = x
                    item.y = y
                    return True
                if fit:
                    x += fit[0].w - 1
                x += 1
        return False

    def resolve_conflicts(self, item: GridItem, *, strategy: str | None = None) -> bool:
        """Accept a free position, else defer to the named strategy."""
        if self.fits(item) is True:
            return True
        name = strategy or self.settings.conflict_resolution
        resolver = self.strategies.resolve(name)
        if resolver is None:
            _LOG.debug("conflict_unresolved strategy=%s item_id=%s", name, item.id)
            return False
        return bool(resolver(self, item))

    def item_at(self, x: int, y: int) -> GridItem | None:
        if not (0 <= y < self._cells.shape[0] and 0 <= x < self._cells.shape[1]):
            return None
        slot = int(self._cells[y, x])
        if slot == EMPTY:
            return None
        return self._items_by_slot.get(slot)

    def occupied_cells(self, item: GridItem) -> set[tuple[int, int]]:
        """Return ``(x, y)`` cells currently holding the item."""
        slot = self._slot_by_item.get(item)
        if slot is None:
            return set()
        ys, xs = np.nonzero(self._cells == slot)
        return {(int(x), int(y)) for x, y in zip(xs, ys)}

    def placed_items(self) -> list[GridItem]:
        """Return distinct items present in the matrix, in row-major order."""
        placed: list[GridItem] = []
        for slot in dict.fromkeys(self._cells.ravel().tolist()):
            if slot == EMPTY:
                continue
            item = self._items_by_slot.get(slot)
            if item is not None:
                placed.append(item)
        return placed

    def to_rows(self) -> list[list[GridItem | None]]:
        """Return the matrix as nested lists of item references."""
        return [[self._items_by_slot.get(slot) for slot in row] for row in self._cells.tolist()]

    def snapshot(self) -> np.ndarray:
        return self._cells.copy()

    # -- mutation -------------------------------------------------------

    def place(self, item: GridItem) -> PlacementResult:
        """Position the item, grow as needed, then write its whole footprint.

        Growth is validated for the full footprint before any row, column or
        cell is touched, so a failed placement leaves the matrix unchanged.
        """
        if item.w < 1 or item.h < 1:
            _LOG.error("placement_invalid_dimensions w=%s h=%s item_id=%s", item.w, item.h, item.id)
            return PlacementResult.failed(item, InvalidDimensions(f"invalid span {item.w}x{item.h}"))

        if item.has_position:
            if not self.resolve_conflicts(item):
                return PlacementResult.failed(item, self._explain_failure(item))
        elif not self.find_empty_position(item):
            _LOG.debug("placement_no_free_position item_id=%s", item.id)
            return PlacementResult.failed(
                item, UnresolvableConflict("no free position within bounds")
            )

        rows_needed = item.y + item.h
        cols_needed = item.x + item.w
        if (self.settings.max_rows and rows_needed > self.settings.max_rows) or (
            self.settings.max_cols and cols_needed > self.settings.max_cols
        ):
            _LOG.debug("placement_bounds_exceeded item_id=%s", item.id)
            return PlacementResult.failed(
                item, BoundsExceeded(f"footprint needs {rows_needed}x{cols_needed} cells")
            )

        while self._cells.shape[0] < rows_needed:
            self.add_row()
        while self.col_count(current_only=True) < cols_needed:
            self.add_col()

        slot = self._slot_for(item)
        self._cells[item.y : rows_needed, item.x : cols_needed] = slot
        return PlacementResult.placed(item)

    def remove(self, item: GridItem) -> None:
        """Clear the item's current footprint; cells outside the extent are skipped."""
        slot = self._slot_by_item.get(item)
        if slot is None or not item.has_position:
            return
        region = self._cells[item.y : item.y + item.h, item.x : item.x + item.w]
        region[region == slot] = EMPTY

    # -- internals ------------------------------------------------------

    def _candidate(self, item: GridItem, pos: Position | None) -> tuple[int, int]:
        if pos is not None:
            return pos.x, pos.y
        return (item.x if item.x is not None else 0, item.y if item.y is not None else 0)

    def _slot_for(self, item: GridItem) -> int:
        slot = self._slot_by_item.get(item)
        if slot is None:
            slot = self._next_slot
            self._next_slot += 1
            self._slot_by_item[item] = slot
            self._items_by_slot[slot] = item
        return slot

    def _explain_failure(self, item: GridItem) -> BoundsExceeded | UnresolvableConflict:
        if self.fits(item) is False:
            _LOG.debug("placement_out_of_bounds x=%s y=%s item_id=%s", item.x, item.y, item.id)
            return BoundsExceeded(f"({item.x}, {item.y}) span {item.w}x{item.h} is out of bounds")
        _LOG.debug("placement_conflict x=%s y=%s item_id=%s", item.x, item.y, item.id)
        return UnresolvableConflict(f"({item.x}, {item.y}) overlaps placed items")
