"""Logical grid: item store, occupancy matrix and lifecycle events."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from copy import deepcopy
from typing import Any, TypeVar

from tilegrid.api.errors import InvalidDimensions, InvalidPosition, PlacementResult
from tilegrid.api.events import (
    EventBus,
    PostAddItem,
    PostBuildGrid,
    PostInitialize,
    PostRemoveItem,
    PreAddItem,
    PreBuildGrid,
    PreInitialize,
    PreRemoveItem,
    Subscription,
    create_null_event_bus,
)
from tilegrid.api.items import Dimensions, GridItem, Position
from tilegrid.api.settings import GridSettings, log_unknown_options
from tilegrid.core.matrix import FitResult, GridMatrix
from tilegrid.core.store import ItemStore
from tilegrid.core.strategies import ConflictStrategy, StrategyRegistry

_LOG = logging.getLogger("tilegrid.grid")

TEvent = TypeVar("TEvent")


class Grid:
    """Packs items onto an implicit integer grid that grows on demand.

    Every mutation runs to completion synchronously. Ordinary placement
    failures come back as a falsy ``PlacementResult``; the item stays in the
    store, unplaced.
    """

    def __init__(
        self,
        settings: GridSettings | None = None,
        *,
        items: Iterable[GridItem] = (),
        events: EventBus | None = None,
        strategies: StrategyRegistry | None = None,
        **options: Any,
    ) -> None:
        log_unknown_options(options, GridSettings)
        self.settings = settings if settings is not None else GridSettings.from_options(options)
        self.events: EventBus = events if events is not None else create_null_event_bus()
        self.items = ItemStore()
        self.matrix = GridMatrix(self.settings, strategies)

        self.events.publish(PreInitialize(self, options=dict(options)))
        for item in items:
            self.add_item(item, place=False)
        if len(self.items) > 0:
            self.build_grid()
        else:
            self.reset_grid()
        self.events.publish(PostInitialize(self, options=dict(options)))

    # -- observable -----------------------------------------------------

    def on(self, event_type: type[TEvent], handler: Callable[[TEvent], None]) -> Subscription:
        """Subscribe to a grid lifecycle event type."""
        return self.events.subscribe(event_type, handler)

    def off(self, subscription: Subscription) -> None:
        self.events.unsubscribe(subscription)

    # -- grid structure -------------------------------------------------

    def row_count(self, current_only: bool = False) -> int:
        return self.matrix.row_count(current_only)

    def col_count(self, current_only: bool = False) -> int:
        return self.matrix.col_count(current_only)

    def reset_grid(self) -> None:
        self.matrix.reset()

    def build_grid(self) -> None:
        """Rebuild the matrix from scratch by placing every stored item in order."""
        self.events.publish(PreBuildGrid(self))
        self.matrix.reset()
        failed = 0
        for item in self.items:
            if not self.matrix.place(item):
                failed += 1
        if failed:
            _LOG.info("grid_build_partial failed=%d total=%d", failed, len(self.items))
        self.events.publish(PostBuildGrid(self))

    def sort_items(self) -> None:
        """Order the store by ``(y, x)`` so rebuilds are deterministic."""
        self.items.sort_by_position()

    def register_strategy(self, name: str, strategy: ConflictStrategy) -> None:
        self.matrix.strategies.register(name, strategy)

    # -- queries --------------------------------------------------------

    def fits(
        self,
        item: GridItem,
        pos: Position | None = None,
        *,
        report_conflicts: bool = True,
    ) -> FitResult:
        return self.matrix.fits(item, pos, report_conflicts=report_conflicts)

    def find_empty_position(
        self,
        item: GridItem,
        *,
        start: Position | None = None,
        return_pos: bool = False,
    ) -> Position | bool:
        return self.matrix.find_empty_position(item, start=start, return_pos=return_pos)

    def resolve_conflicts(self, item: GridItem, *, strategy: str | None = None) -> bool:
        return self.matrix.resolve_conflicts(item, strategy=strategy)

    def item_at(self, x: int, y: int) -> GridItem | None:
        return self.matrix.item_at(x, y)

    # -- item mutation --------------------------------------------------

    def add_item(
        self,
        item: GridItem,
        *,
        rebuild: bool = False,
        place: bool = True,
    ) -> PlacementResult:
        """Store an item and place it (or rebuild the whole grid)."""
        self.events.publish(PreAddItem(self, item=item))
        self.items.append(item)
        if rebuild:
            self.build_grid()
            result = self._result_after_rebuild(item)
        elif place:
            result = self.matrix.place(item)
        else:
            result = PlacementResult(ok=False, item=item)
        self.events.publish(PostAddItem(self, item=item, placed=result.ok))
        return result

    def remove_item(self, item: GridItem, *, rebuild: bool = False, unplace: bool = True) -> None:
        """Release an item from the store and clear its cells."""
        self.events.publish(PreRemoveItem(self, item=item))
        if not self.items.remove(item):
            _LOG.warning("remove_unknown_item item_id=%s", item.id)
        if rebuild:
            self.build_grid()
        elif unplace:
            self.matrix.remove(item)
        self.events.publish(PostRemoveItem(self, item=item))

    def move_item(self, item: GridItem, pos: Position | Mapping[str, Any] | None) -> PlacementResult:
        """Re-place an item with its top-left corner at ``pos``."""
        target = _coerce_position(pos)
        if target is None:
            _LOG.error("move_invalid_position pos=%r item_id=%s", pos, item.id)
            return PlacementResult.failed(item, InvalidPosition(f"invalid position {pos!r}"))
        return self._replace(item, x=target.x, y=target.y)

    def resize_item(
        self,
        item: GridItem,
        dim: Dimensions | Mapping[str, Any] | None,
    ) -> PlacementResult:
        """Re-place an item with a new cell span."""
        target = _coerce_dimensions(dim)
        if target is None:
            _LOG.error("resize_invalid_dimensions dim=%r item_id=%s", dim, item.id)
            return PlacementResult.failed(item, InvalidDimensions(f"invalid dimensions {dim!r}"))
        return self._replace(item, w=target.w, h=target.h)

    def clone(self, *, events: EventBus | None = None) -> Grid:
        """Return an independent grid built from deep copies of settings and items."""
        return Grid(
            deepcopy(self.settings),
            items=deepcopy(self.items.as_list()),
            events=events,
            strategies=self.matrix.strategies.copy(),
        )

    def _replace(self, item: GridItem, **geometry: int) -> PlacementResult:
        """Apply new geometry and re-place; restore the old footprint on failure."""
        previous = {name: getattr(item, name) for name in ("x", "y", "w", "h")}
        was_placed = bool(self.matrix.occupied_cells(item))
        self.matrix.remove(item)
        for name, value in geometry.items():
            setattr(item, name, value)
        result = self.matrix.place(item)
        if not result:
            for name, value in previous.items():
                setattr(item, name, value)
            if was_placed:
                self.matrix.place(item)
        return result

    def _result_after_rebuild(self, item: GridItem) -> PlacementResult:
        if self.matrix.occupied_cells(item):
            return PlacementResult.placed(item)
        return PlacementResult(ok=False, item=item)


def _coerce_position(pos: Position | Mapping[str, Any] | None) -> Position | None:
    if isinstance(pos, Position):
        return pos
    if isinstance(pos, Mapping) and pos.get("x") is not None and pos.get("y") is not None:
        return Position(x=int(pos["x"]), y=int(pos["y"]))
    return None


def _coerce_dimensions(dim: Dimensions | Mapping[str, Any] | None) -> Dimensions | None:
    if isinstance(dim, Dimensions):
        return dim
    if isinstance(dim, Mapping) and dim.get("w") is not None and dim.get("h") is not None:
        return Dimensions(w=int(dim["w"]), h=int(dim["h"]))
    return None
