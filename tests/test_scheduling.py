import pytest

from procedures.scheduling import ManualScheduler


def test_call_soon_runs_in_submission_order():
    scheduler = ManualScheduler()
    calls = []
    scheduler.call_soon(lambda: calls.append("a"))
    scheduler.call_soon(lambda: calls.append("b"))
    assert calls == []
    assert scheduler.run_ready() == 2
    assert calls == ["a", "b"]


def test_call_later_fires_when_due():
    scheduler = ManualScheduler()
    calls = []
    scheduler.call_later(100, lambda: calls.append(scheduler.now))
    scheduler.advance(99)
    assert calls == []
    scheduler.advance(1)
    assert calls == [100]
    assert scheduler.now == 100


def test_cancelled_callbacks_never_run():
    scheduler = ManualScheduler()
    calls = []
    handle = scheduler.call_later(10, lambda: calls.append("x"))
    assert scheduler.pending == 1
    handle.cancel()
    assert scheduler.pending == 0
    scheduler.advance(50)
    assert calls == []


def test_callbacks_scheduled_by_callbacks_run_when_due():
    scheduler = ManualScheduler()
    calls = []

    def outer():
        calls.append("outer")
        scheduler.call_later(5, lambda: calls.append("inner"))

    scheduler.call_later(10, outer)
    scheduler.advance(20)
    assert calls == ["outer", "inner"]
    assert scheduler.now == 20


def test_clock_cannot_go_backwards():
    with pytest.raises(ValueError):
        ManualScheduler().advance(-1)
