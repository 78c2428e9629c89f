import pytest

from tilegrid.runtime.scheduler import Scheduler


def test_scheduler_call_every_runs_recurring() -> None:
    scheduler = Scheduler()
    calls: list[int] = []
    scheduler.call_every(0.1, lambda: calls.append(1))

    assert scheduler.advance(0.1) == 1
    assert scheduler.advance(0.1) == 1
    assert scheduler.advance(0.05) == 0
    assert len(calls) == 2
    assert scheduler.now_seconds == pytest.approx(0.25)


def test_scheduler_cancel_prevents_execution() -> None:
    scheduler = Scheduler()
    calls: list[str] = []
    task_id = scheduler.call_every(0.1, lambda: calls.append("never"))
    scheduler.cancel(task_id)
    assert scheduler.advance(0.2) == 0
    assert calls == []
    assert scheduler.queued_task_count == 0


def test_scheduler_validates_time_arguments() -> None:
    scheduler = Scheduler()
    with pytest.raises(ValueError):
        scheduler.call_every(0.0, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-0.1)
    scheduler.advance(1.0)
    with pytest.raises(ValueError):
        scheduler.run_due(0.5)
