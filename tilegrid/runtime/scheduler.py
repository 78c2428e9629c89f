"""Host-driven repeating timers for poll-mode resize sessions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

TickCallback = Callable[[], None]


@dataclass(slots=True)
class _Timer:
    interval_seconds: float
    next_due_seconds: float
    callback: TickCallback


class Scheduler:
    """Repeating timers on a virtual clock the host moves with ``advance``.

    Nothing runs on its own thread; callbacks fire synchronously inside
    ``advance``/``run_due`` in due order, ties broken by registration order.
    A callback may cancel its own timer or register new ones.
    """

    def __init__(self) -> None:
        self._now_seconds = 0.0
        self._next_timer_id = 1
        self._timers: dict[int, _Timer] = {}

    @property
    def now_seconds(self) -> float:
        return self._now_seconds

    @property
    def queued_task_count(self) -> int:
        return len(self._timers)

    def call_every(self, interval_seconds: float, callback: TickCallback) -> int:
        """Register ``callback`` to fire every ``interval_seconds``; return its id."""
        if interval_seconds <= 0.0:
            raise ValueError("interval_seconds must be > 0")
        timer_id = self._next_timer_id
        self._next_timer_id += 1
        self._timers[timer_id] = _Timer(
            interval_seconds=interval_seconds,
            next_due_seconds=self._now_seconds + interval_seconds,
            callback=callback,
        )
        return timer_id

    def cancel(self, timer_id: int) -> None:
        self._timers.pop(timer_id, None)

    def advance(self, delta_seconds: float) -> int:
        """Move the clock forward and fire every tick that fell due."""
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        return self.run_due(self._now_seconds + delta_seconds)

    def run_due(self, now_seconds: float) -> int:
        """Fire ticks due at or before ``now_seconds``; return how many fired."""
        if now_seconds < self._now_seconds:
            raise ValueError("now_seconds cannot move backwards")
        self._now_seconds = now_seconds
        fired = 0
        while True:
            timer_id = self._earliest_due()
            if timer_id is None:
                break
            timer = self._timers[timer_id]
            timer.next_due_seconds += timer.interval_seconds
            timer.callback()
            fired += 1
        return fired

    def _earliest_due(self) -> int | None:
        due = [
            (timer.next_due_seconds, timer_id)
            for timer_id, timer in self._timers.items()
            if timer.next_due_seconds <= self._now_seconds
        ]
        return min(due)[1] if due else None
