"""Public event bus contracts and grid lifecycle events."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

if TYPE_CHECKING:
    from tilegrid.api.items import DisplayItem, GridItem

TEvent = TypeVar("TEvent")


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int


class EventBus(Protocol):
    """Public in-process pub/sub contract."""

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        """Subscribe handler for event type."""

    def unsubscribe(self, subscription: Subscription) -> None:
        """Unsubscribe token."""

    def publish(self, event: object) -> int:
        """Publish event and return invocation count."""


@dataclass(frozen=True, slots=True)
class GridEvent:
    """Base type for every grid lifecycle event."""

    source: object = field(repr=False)


@dataclass(frozen=True, slots=True)
class PreInitialize(GridEvent):
    options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class PostInitialize(GridEvent):
    options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class PreBuildGrid(GridEvent):
    pass


@dataclass(frozen=True, slots=True)
class PostBuildGrid(GridEvent):
    pass


@dataclass(frozen=True, slots=True)
class PreAddItem(GridEvent):
    item: GridItem | None = None


@dataclass(frozen=True, slots=True)
class PostAddItem(GridEvent):
    item: GridItem | None = None
    placed: bool = False


@dataclass(frozen=True, slots=True)
class PreRemoveItem(GridEvent):
    item: GridItem | None = None


@dataclass(frozen=True, slots=True)
class PostRemoveItem(GridEvent):
    item: GridItem | None = None


@dataclass(frozen=True, slots=True)
class PreBuildDisplay(GridEvent):
    pass


@dataclass(frozen=True, slots=True)
class BuildDisplayItem(GridEvent):
    display_item: DisplayItem | None = None


@dataclass(frozen=True, slots=True)
class PostBuildDisplay(GridEvent):
    pass


@dataclass(frozen=True, slots=True)
class PreAddItemToDisplay(GridEvent):
    display_item: DisplayItem | None = None
    element: object | None = None


@dataclass(frozen=True, slots=True)
class PostAddItemToDisplay(GridEvent):
    display_item: DisplayItem | None = None
    element: object | None = None


def create_event_bus() -> EventBus:
    """Create default grid event bus implementation."""
    from tilegrid.runtime.events import RuntimeEventBus

    return RuntimeEventBus()


def create_null_event_bus() -> EventBus:
    """Create the no-op bus used when no observable capability is injected."""
    from tilegrid.runtime.events import NullEventBus

    return NullEventBus()


__all__ = [
    "BuildDisplayItem",
    "EventBus",
    "GridEvent",
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
    "create_event_bus",
    "create_null_event_bus",
]
