"""Event bus implementations for grid lifecycle and input coordination."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from tilegrid.api.errors import MissingCapability
from tilegrid.api.events import Subscription

TEvent = TypeVar("TEvent")
EventHandler = Callable[[Any], None]


class RuntimeEventBus:
    """Simple in-process pub/sub keyed by event type."""

    def __init__(self) -> None:
        self._next_id = 1
        self._subscriptions: dict[int, tuple[type[object], EventHandler]] = {}

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        """Subscribe handler for an event type."""
        sub_id = self._next_id
        self._next_id += 1
        self._subscriptions[sub_id] = (event_type, handler)
        return Subscription(sub_id)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription if present."""
        self._subscriptions.pop(subscription.id, None)

    def publish(self, event: object) -> int:
        """Publish one event and return number of invoked handlers."""
        invoked = 0
        for subscribed_type, handler in tuple(self._subscriptions.values()):
            if isinstance(event, subscribed_type):
                handler(event)
                invoked += 1
        return invoked


class NullEventBus:
    """Bus used when no observable capability was injected.

    Publishing is a silent no-op; subscribing is an error because nothing
    would ever be delivered.
    """

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        raise MissingCapability("grid was built without an event bus; pass events=create_event_bus()")

    def unsubscribe(self, subscription: Subscription) -> None:
        raise MissingCapability("grid was built without an event bus; pass events=create_event_bus()")

    def publish(self, event: object) -> int:
        return 0


EventBus = RuntimeEventBus
