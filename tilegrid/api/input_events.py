"""Public input event types."""

from __future__ import annotations

from dataclasses import dataclass

POINTER_DOWN = "pointer_down"
POINTER_MOVE = "pointer_move"
POINTER_UP = "pointer_up"


@dataclass(frozen=True, slots=True)
class PointerEvent:
    """Raw pointer event in page coordinates."""

    event_type: str
    x: float
    y: float
    button: int = 0


__all__ = ["POINTER_DOWN", "POINTER_MOVE", "POINTER_UP", "PointerEvent"]
