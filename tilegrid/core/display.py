"""Pixel-space projection of a logical grid."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from copy import deepcopy
from typing import Any

from tilegrid.api.display_adapter import DisplayAdapter
from tilegrid.api.errors import MissingCapability, PlacementResult
from tilegrid.api.events import BuildDisplayItem, EventBus, PostBuildDisplay, PreBuildDisplay
from tilegrid.api.input_events import PointerEvent
from tilegrid.api.items import (
    Dimensions,
    DisplayFit,
    DisplayItem,
    GridItem,
    PixelPoint,
    Position,
)
from tilegrid.api.settings import DisplaySettings, GridSettings, log_unknown_options
from tilegrid.core.grid import Grid
from tilegrid.core.store import ItemStore

_LOG = logging.getLogger("tilegrid.display")


class DisplayGrid:
    """Keeps a wholesale-rebuilt list of ``DisplayItem`` in sync with a ``Grid``.

    Mutations routed through this wrapper rebuild the projection afterwards;
    mutating the wrapped grid directly requires an explicit ``build_display``.
    """

    def __init__(
        self,
        grid: Grid | None = None,
        settings: DisplaySettings | None = None,
        *,
        adapter: DisplayAdapter | None = None,
        cell_element: object | None = None,
        **options: Any,
    ) -> None:
        if grid is None:
            grid_options = {k: v for k, v in options.items() if k not in ("items", "events")}
            log_unknown_options(grid_options, GridSettings, DisplaySettings)
            grid = Grid(
                GridSettings.from_options(grid_options),
                items=options.get("items", ()),
                events=options.get("events"),
            )
        self.grid = grid
        self.settings = settings if settings is not None else DisplaySettings.from_options(options)
        self.adapter = adapter
        self.display: list[DisplayItem] = []
        if self.settings.display_element is not None and adapter is not None:
            self.set_display_element(self.settings.display_element, cell_element=cell_element)

    @property
    def events(self) -> EventBus:
        return self.grid.events

    @property
    def items(self) -> ItemStore:
        return self.grid.items

    # -- projection -----------------------------------------------------

    def build_display(self) -> list[DisplayItem]:
        """Discard every display item and project each stored item anew."""
        self.events.publish(PreBuildDisplay(self))
        cell_w = self.settings.cell_width
        cell_h = self.settings.cell_height
        display: list[DisplayItem] = []
        for item in self.grid.items:
            if not item.has_position:
                item.display_item = None
                continue
            display_item = DisplayItem(
                grid_item=item,
                x=item.x * cell_w,
                y=item.y * cell_h,
                w=item.w * cell_w,
                h=item.h * cell_h,
            )
            item.display_item = display_item
            display.append(display_item)
            self.events.publish(BuildDisplayItem(self, display_item=display_item))
        self.display = display
        self.events.publish(PostBuildDisplay(self))
        return display

    def set_display_element(
        self,
        element: object | None = None,
        *,
        cell_element: object | None = None,
        rebuild_display: bool | None = None,
    ) -> None:
        """Adopt container (and optional cell) pixel sizes from the host display."""
        if element is None:
            element = self.settings.display_element
        if element is None:
            return
        adapter = self._require_adapter()
        settings = self.settings
        settings.display_element = element
        settings.display_width, settings.display_height = adapter.element_size(element)
        if cell_element is not None:
            settings.cell_width, settings.cell_height = adapter.element_size(cell_element)

        regen = False
        grid_settings = self.grid.settings
        if settings.resize_max_rows and settings.display_height and settings.cell_height:
            grid_settings.max_rows = int(settings.display_height // settings.cell_height)
            regen = True
        if settings.resize_max_cols and settings.display_width and settings.cell_width:
            grid_settings.max_cols = int(settings.display_width // settings.cell_width)
            regen = True
        if regen and len(self.grid.items) > 0:
            self.grid.build_grid()

        if rebuild_display is None:
            rebuild_display = len(self.grid.items) > 0
        if rebuild_display:
            self.build_display()

    # -- inverse mapping ------------------------------------------------

    def cursor_pos(self, event: PointerEvent, origin: PixelPoint | None = None) -> PixelPoint:
        """Return a pointer position relative to the container origin."""
        if origin is None:
            origin = self._container_origin()
        return PixelPoint(x=event.x - origin.x, y=event.y - origin.y)

    def display_pos(
        self,
        pos: PixelPoint | PointerEvent | object,
        origin: PixelPoint | None = None,
    ) -> Position | None:
        """Map a pixel position (or pointer event) to the logical cell under it."""
        if isinstance(pos, PointerEvent):
            pos = self.cursor_pos(pos, origin)
        elif isinstance(pos, PixelPoint) and origin is not None:
            pos = PixelPoint(x=pos.x - origin.x, y=pos.y - origin.y)
        if not isinstance(pos, PixelPoint):
            _LOG.error("display_pos_invalid pos=%r", pos)
            return None
        return Position(
            x=_cell_index(pos.x, self.settings.cell_width),
            y=_cell_index(pos.y, self.settings.cell_height),
        )

    def display_item_fits(
        self,
        pos: PixelPoint | PointerEvent | Position | GridItem | None,
        dim: Dimensions | GridItem | Mapping[str, Any] | None = None,
        *,
        is_grid_pos: bool = False,
    ) -> DisplayFit | None:
        """Probe whether a footprint fits at a pixel (or logical) position.

        A ``GridItem`` passed as ``pos`` or ``dim`` never conflicts with itself.
        """
        if is_grid_pos:
            grid_pos = Position(x=_attr(pos, "x") or 0, y=_attr(pos, "y") or 0)
        else:
            grid_pos = self.display_pos(pos)
            if grid_pos is None:
                return None

        owner = dim if isinstance(dim, GridItem) else pos if isinstance(pos, GridItem) else None
        w = _attr(dim, "w")
        h = _attr(dim, "h")
        probe = GridItem(
            w=1 if w is None else w,
            h=1 if h is None else h,
            x=grid_pos.x,
            y=grid_pos.y,
            id=_attr(dim, "id") if _attr(dim, "id") is not None else _attr(pos, "id"),
        )
        if probe.w < 1 or probe.h < 1:
            _LOG.debug("display_fit_empty_span w=%s h=%s", probe.w, probe.h)
            return DisplayFit(pos=grid_pos, fits=False)
        fit = self.grid.fits(probe)
        if isinstance(fit, bool):
            return DisplayFit(pos=grid_pos, fits=fit)
        conflicts = tuple(other for other in fit if other is not owner)
        return DisplayFit(pos=grid_pos, fits=not conflicts, conflicts=conflicts)

    # -- mutations ------------------------------------------------------

    def add_item(self, item: GridItem, **options: Any) -> PlacementResult:
        result = self.grid.add_item(item, **options)
        self.build_display()
        return result

    def remove_item(self, item: GridItem, **options: Any) -> None:
        self.grid.remove_item(item, **options)
        self.build_display()

    def move_item(self, item: GridItem, pos: Any) -> PlacementResult:
        result = self.grid.move_item(item, pos)
        if result:
            self.build_display()
        return result

    def resize_item(self, item: GridItem, dim: Any) -> PlacementResult:
        result = self.grid.resize_item(item, dim)
        if result:
            self.build_display()
        return result

    def build_grid(self) -> None:
        self.grid.build_grid()
        self.build_display()

    def clone(self, *, events: EventBus | None = None) -> DisplayGrid:
        """Clone the logical grid; the display element is shared, not copied."""
        clone = DisplayGrid(
            self.grid.clone(events=events),
            deepcopy(self.settings),
            adapter=self.adapter,
        )
        if len(clone.grid.items) > 0:
            clone.build_display()
        return clone

    # -- internals ------------------------------------------------------

    def _require_adapter(self) -> DisplayAdapter:
        if self.adapter is None:
            raise MissingCapability("display operations need a DisplayAdapter")
        return self.adapter

    def _container_origin(self) -> PixelPoint:
        element = self.settings.display_element
        if element is None or self.adapter is None:
            return PixelPoint(0.0, 0.0)
        left, top = self.adapter.element_origin(element)
        return PixelPoint(x=left, y=top)


def _cell_index(pixels: float, cell_size: float) -> int:
    # Zero pixels is cell 0 even before cell sizes are known.
    if not pixels or not cell_size:
        return 0
    return int(pixels // cell_size)


def _attr(source: object, name: str) -> Any:
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)
