"""Public grid API contracts and value types."""

from tilegrid.api.display_adapter import DisplayAdapter
from tilegrid.api.errors import (
    BoundsExceeded,
    GridError,
    InvalidDimensions,
    InvalidPosition,
    MissingCapability,
    PlacementResult,
    UnresolvableConflict,
)
from tilegrid.api.events import (
    BuildDisplayItem,
    EventBus,
    GridEvent,
    PostAddItem,
    PostAddItemToDisplay,
    PostBuildDisplay,
    PostBuildGrid,
    PostInitialize,
    PostRemoveItem,
    PreAddItem,
    PreAddItemToDisplay,
    PreBuildDisplay,
    PreBuildGrid,
    PreInitialize,
    PreRemoveItem,
    Subscription,
    create_event_bus,
)
from tilegrid.api.input_events import POINTER_DOWN, POINTER_MOVE, POINTER_UP, PointerEvent
from tilegrid.api.items import Dimensions, DisplayFit, DisplayItem, GridItem, PixelPoint, Position
from tilegrid.api.logging import GridLoggingConfig
from tilegrid.api.settings import DisplaySettings, GridSettings, InteractionSettings

__all__ = [
    "BoundsExceeded",
    "BuildDisplayItem",
    "Dimensions",
    "DisplayAdapter",
    "DisplayFit",
    "DisplayItem",
    "DisplaySettings",
    "EventBus",
    "GridError",
    "GridEvent",
    "GridItem",
    "GridLoggingConfig",
    "GridSettings",
    "InteractionSettings",
    "InvalidDimensions",
    "InvalidPosition",
    "MissingCapability",
    "POINTER_DOWN",
    "POINTER_MOVE",
    "POINTER_UP",
    "PixelPoint",
    "PlacementResult",
    "PointerEvent",
    "Position",
    "PostAddItem",
    "PostAddItemToDisplay",
    "PostBuildDisplay",
    "PostBuildGrid",
    "PostInitialize",
    "PostRemoveItem",
    "PreAddItem",
    "PreAddItemToDisplay",
    "PreBuildDisplay",
    "PreBuildGrid",
    "PreInitialize",
    "PreRemoveItem",
    "Subscription",
    "UnresolvableConflict",
    "create_event_bus",
]
