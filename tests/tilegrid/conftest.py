from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from tilegrid.api.events import GridEvent
from tilegrid.runtime.events import RuntimeEventBus


@dataclass(slots=True)
class FakeElement:
    name: str
    width: float = 0.0
    height: float = 0.0
    left: float = 0.0
    top: float = 0.0
    children: list["FakeElement"] = field(default_factory=list)


class FakeDisplayAdapter:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple]] = []

    def element_size(self, element: FakeElement) -> tuple[float, float]:
        return element.width, element.height

    def element_origin(self, element: FakeElement) -> tuple[float, float]:
        return element.left, element.top

    def set_element_size(
        self,
        element: FakeElement,
        *,
        width: float | None = None,
        height: float | None = None,
    ) -> None:
        self.calls.append(("set_element_size", (element.name, width, height)))
        if width is not None:
            element.width = width
        if height is not None:
            element.height = height

    def append(self, container: FakeElement, element: FakeElement) -> None:
        self.calls.append(("append", (container.name, element.name)))
        container.children.append(element)

    def position(self, element: FakeElement, container: FakeElement, x: float, y: float) -> None:
        self.calls.append(("position", (element.name, container.name, x, y)))
        element.left = container.left + x
        element.top = container.top + y


class EventRecorder:
    def __init__(self, bus: RuntimeEventBus) -> None:
        self.events: list[GridEvent] = []
        bus.subscribe(GridEvent, self.events.append)

    @property
    def names(self) -> list[str]:
        return [type(event).__name__ for event in self.events]


@pytest.fixture
def event_bus() -> RuntimeEventBus:
    return RuntimeEventBus()


@pytest.fixture
def adapter() -> FakeDisplayAdapter:
    return FakeDisplayAdapter()
