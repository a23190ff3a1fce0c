from __future__ import annotations

import time

import requests

from logon_core import http_client
from logon_core.request_builder import Credentials, Operation, SessionConfig, build_request, parse_target
from logon_core.state import RawReply
from logon_core.transport import ThreadedTransport


def _request(operation=Operation.LOGIN):
    return build_request(parse_target("https://gw"), operation, Credentials("bob", "pw"), SessionConfig())


def _drain_until(transport, predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        transport.drain()
        if predicate():
            return True
        time.sleep(0.01)
    return False


class _FakeResponse:
    def __init__(self, status_code, content):
        self.status_code = status_code
        self.content = content
        self.reason = "OK"


def test_completion_runs_on_drain_not_on_worker(monkeypatch):
    monkeypatch.setattr(http_client, "execute", lambda request: RawReply(200, b"{}"))
    transport = ThreadedTransport()
    got = []

    transport.send(_request(), got.append)
    assert _drain_until(transport, lambda: got)
    assert got == [RawReply(200, b"{}")]


def test_worker_exception_becomes_status_zero(monkeypatch):
    def boom(request):
        raise RuntimeError("boom")

    monkeypatch.setattr(http_client, "execute", boom)
    transport = ThreadedTransport()
    got = []
    transport.send(_request(), got.append)
    assert _drain_until(transport, lambda: got)
    assert got[0].status_code == 0


def test_post_runs_callback_on_drain():
    transport = ThreadedTransport()
    calls = []
    transport.post(calls.append, "status")
    assert calls == []
    assert transport.drain() == 1
    assert calls == ["status"]


def test_callback_error_does_not_stop_drain():
    transport = ThreadedTransport()
    calls = []

    def bad():
        raise ValueError("x")

    transport.post(bad)
    transport.post(calls.append, 1)
    assert transport.drain() == 2
    assert calls == [1]


def test_execute_maps_connection_failure_to_status_zero(monkeypatch):
    def refuse(self, url, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(requests.Session, "get", refuse)
    reply = http_client.execute(_request())
    assert reply.status_code == 0
    assert "refused" in reply.reason


def test_execute_uses_session_for_verify_mode(monkeypatch):
    seen = {}

    def fake_get(self, url, headers=None, timeout=None):
        seen["session"] = self
        seen["headers"] = headers
        return _FakeResponse(200, b'{"ok": true}')

    monkeypatch.setattr(requests.Session, "get", fake_get)

    reply = http_client.execute(_request(Operation.LOGIN))
    assert reply == RawReply(200, b'{"ok": true}', "OK")
    assert seen["session"] is http_client.get_session(False)
    assert seen["session"].verify is False
    assert seen["headers"]["User-Agent"] == "OPNsense Authenticator"

    verified = build_request(parse_target("https://gw"), Operation.POLL, Credentials("bob", "pw"),
                             SessionConfig(validate_server_certs=True))
    http_client.execute(verified)
    assert seen["session"] is http_client.get_session(True)
    assert seen["session"].verify
