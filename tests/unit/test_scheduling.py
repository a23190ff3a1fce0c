from __future__ import annotations

from logon_core.scheduling import TkRepeatingTimer


class FakeRoot:
    def __init__(self) -> None:
        self.pending = {}
        self._next = 0

    def after(self, ms, func):
        self._next += 1
        after_id = f"after#{self._next}"
        self.pending[after_id] = (ms, func)
        return after_id

    def after_cancel(self, after_id):
        self.pending.pop(after_id, None)

    def fire_all(self):
        due, self.pending = self.pending, {}
        for _, func in due.values():
            func()


def test_start_schedules_interval_in_ms():
    root = FakeRoot()
    timer = TkRepeatingTimer(root, lambda: None)
    timer.start(30)
    assert timer.active
    assert [ms for ms, _ in root.pending.values()] == [30000]


def test_tick_rearms_and_calls_back():
    root = FakeRoot()
    ticks = []
    timer = TkRepeatingTimer(root, lambda: ticks.append(1))
    timer.start(5)
    root.fire_all()
    root.fire_all()
    assert len(ticks) == 2
    assert len(root.pending) == 1


def test_stop_cancels_pending_tick():
    root = FakeRoot()
    ticks = []
    timer = TkRepeatingTimer(root, lambda: ticks.append(1))
    timer.start(5)
    timer.stop()
    root.fire_all()
    assert ticks == []
    assert not timer.active


def test_callback_may_stop_the_timer():
    root = FakeRoot()
    timer = TkRepeatingTimer(root, lambda: timer.stop())
    timer.start(5)
    root.fire_all()
    assert root.pending == {}
    assert not timer.active


def test_restart_replaces_previous_schedule():
    root = FakeRoot()
    timer = TkRepeatingTimer(root, lambda: None)
    timer.start(5)
    timer.start(10)
    assert [ms for ms, _ in root.pending.values()] == [10000]
