from __future__ import annotations

from logon_core.request_builder import Credentials


class FakeRoot:
    def __init__(self) -> None:
        self.scheduled = []  # list of (ms, func)
        self.quits = 0

    def after(self, ms, func):
        self.scheduled.append((ms, func))
        return f"after#{len(self.scheduled)}"

    def quit(self):
        self.quits += 1

    def fire(self, ms):
        due = [func for delay, func in self.scheduled if delay == ms]
        self.scheduled = [(delay, func) for delay, func in self.scheduled if delay != ms]
        for func in due:
            func()


class FakeForm:
    def __init__(self, settings) -> None:
        self.values = dict(settings)
        self.busy = []
        self.shows = 0
        self.hides = 0
        self.errors = []
        self.infos = []

    def credentials(self):
        return Credentials(self.values["username"], "pw")

    def settings(self):
        return dict(self.values)

    def set_busy(self, busy):
        self.busy.append(busy)

    def show(self):
        self.shows += 1

    def hide(self):
        self.hides += 1

    def show_error(self, message):
        self.errors.append(message)

    def show_info(self, message):
        self.infos.append(message)


class FakeStatusDialog:
    def __init__(self) -> None:
        self.statuses = []
        self.clears = 0

    def update(self, status):
        self.statuses.append(status)

    def clear(self):
        self.clears += 1

    def show(self):
        pass


class FakeTray:
    def __init__(self) -> None:
        self.status_enabled = False

    def set_status_enabled(self, enabled):
        self.status_enabled = enabled
