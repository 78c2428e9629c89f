import pytest

from tilegrid.api.errors import MissingCapability
from tilegrid.api.events import GridEvent, PostBuildGrid, PreBuildGrid, create_event_bus, create_null_event_bus
from tilegrid.runtime.events import NullEventBus, RuntimeEventBus


def test_event_bus_supports_polymorphic_subscription() -> None:
    bus = RuntimeEventBus()
    seen: list[str] = []
    bus.subscribe(GridEvent, lambda event: seen.append(type(event).__name__))
    bus.subscribe(PreBuildGrid, lambda event: seen.append("pre-only"))

    assert bus.publish(PreBuildGrid(source=None)) == 2
    assert bus.publish(PostBuildGrid(source=None)) == 1
    assert seen == ["PreBuildGrid", "pre-only", "PostBuildGrid"]


def test_event_bus_unsubscribe_stops_dispatch() -> None:
    bus = RuntimeEventBus()
    seen: list[object] = []
    subscription = bus.subscribe(GridEvent, seen.append)
    bus.unsubscribe(subscription)

    assert bus.publish(PreBuildGrid(source=None)) == 0
    assert seen == []
    assert bus.subscription_count == 0


def test_null_bus_publishes_nowhere_and_refuses_subscriptions() -> None:
    bus = NullEventBus()
    assert bus.publish(PreBuildGrid(source=None)) == 0
    with pytest.raises(MissingCapability):
        bus.subscribe(GridEvent, lambda event: None)


def test_factories_return_runtime_implementations() -> None:
    assert isinstance(create_event_bus(), RuntimeEventBus)
    assert isinstance(create_null_event_bus(), NullEventBus)
