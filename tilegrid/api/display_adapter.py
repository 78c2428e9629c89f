"""Display adapter boundary between the grid model and a host renderer."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DisplayAdapter(Protocol):
    """DOM-like element operations supplied by the host display.

    Elements are opaque to the grid; only the adapter inspects or mutates them.
    """

    def element_size(self, element: object) -> tuple[float, float]:
        """Return rendered ``(width, height)`` of an element in pixels."""

    def element_origin(self, element: object) -> tuple[float, float]:
        """Return the page ``(left, top)`` offset of an element in pixels."""

    def set_element_size(
        self,
        element: object,
        *,
        width: float | None = None,
        height: float | None = None,
    ) -> None:
        """Resize an element; ``None`` leaves that axis unchanged."""

    def append(self, container: object, element: object) -> None:
        """Attach an element to a container."""

    def position(self, element: object, container: object, x: float, y: float) -> None:
        """Place an element's top-left corner at ``(x, y)`` inside a container."""


__all__ = ["DisplayAdapter"]
