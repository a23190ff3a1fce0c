from __future__ import annotations

import json

from logon_core.session import SessionListener
from logon_core.state import RawReply


class FakeTransport:
    def __init__(self) -> None:
        self.sent = []  # list of (request, on_complete)

    def send(self, request, on_complete):
        self.sent.append((request, on_complete))

    @property
    def last_request(self):
        return self.sent[-1][0]

    def requests_for(self, operation):
        return [req for req, _ in self.sent if req.operation is operation]

    def complete(self, index, status_code=200, body=b"{}"):
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode("utf-8")
        _, on_complete = self.sent[index]
        on_complete(RawReply(status_code=status_code, body=body))

    def complete_last(self, status_code=200, body=b"{}"):
        self.complete(len(self.sent) - 1, status_code, body)


class FakeTimer:
    def __init__(self) -> None:
        self.active = False
        self.interval = None
        self.starts = 0
        self.stops = 0

    def start(self, interval_sec):
        self.active = True
        self.interval = interval_sec
        self.starts += 1

    def stop(self):
        if self.active:
            self.stops += 1
        self.active = False


class RecordingListener(SessionListener):
    def __init__(self) -> None:
        self.states = []
        self.statuses = []
        self.errors = []
        self.exit_requests = 0

    def on_state_changed(self, state):
        self.states.append(state)

    def on_status_updated(self, status):
        self.statuses.append(status)

    def on_error_message(self, message):
        self.errors.append(message)

    def on_exit_requested(self):
        self.exit_requests += 1
