"""2-D grid packing engine with pixel projection and interactive resizing."""

from tilegrid.api import (
    Dimensions,
    DisplaySettings,
    GridItem,
    GridSettings,
    InteractionSettings,
    PlacementResult,
    PointerEvent,
    Position,
    create_event_bus,
)
from tilegrid.core import DisplayGrid, Grid, InteractiveGrid, ResizeSession

__all__ = [
    "Dimensions",
    "DisplayGrid",
    "DisplaySettings",
    "Grid",
    "GridItem",
    "GridSettings",
    "InteractionSettings",
    "InteractiveGrid",
    "PlacementResult",
    "PointerEvent",
    "Position",
    "ResizeSession",
    "create_event_bus",
]
