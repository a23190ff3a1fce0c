"""
HTTP sessions with connection pooling, TLS 1.2 floor, and per-mode verification.

Two pooled sessions exist: one verifying the portal certificate against the
CA bundle, one not (self-signed captive portals). Requests never retry:
a failed keepalive simply ends the session.
"""

import os
import ssl

import certifi
import requests
import urllib3
from requests.adapters import HTTPAdapter
from urllib3.util.ssl_ import create_urllib3_context

from .config import log
from .state import RawReply

# verify=False is a deliberate, user-visible choice here; don't spam the log.
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)


class TLSAdapter(HTTPAdapter):
    """HTTPAdapter pinned to TLS >= 1.2 with an explicit verification mode."""

    def __init__(self, verify_peer, **kwargs):
        self._ssl_context = create_urllib3_context(
            ssl_minimum_version=ssl.TLSVersion.TLSv1_2,
            cert_reqs=ssl.CERT_REQUIRED if verify_peer else ssl.CERT_NONE,
        )
        super().__init__(**kwargs)

    def init_poolmanager(self, *args, **kwargs):
        kwargs["ssl_context"] = self._ssl_context
        return super().init_poolmanager(*args, **kwargs)


def _get_ca_bundle():
    """CA bundle path: env override → certifi."""
    env_ca = os.environ.get('REQUESTS_CA_BUNDLE') or os.environ.get('SSL_CERT_FILE')
    if env_ca and os.path.isfile(env_ca):
        return env_ca
    return certifi.where()


def create_session(verify_peer):
    """Create a requests.Session with pooling, no retries, and the given TLS mode."""
    session = requests.Session()
    adapter = TLSAdapter(
        verify_peer,
        pool_connections=1,
        pool_maxsize=3,
        max_retries=0,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = _get_ca_bundle() if verify_peer else False
    return session


def get_session(verify_peer):
    return _sessions[bool(verify_peer)]


def execute(request):
    """
    Send one PortalRequest and return a RawReply. Blocking; called from worker
    threads only. Transport failures become status 0 instead of raising.
    """
    session = get_session(request.verify_peer)
    try:
        resp = session.get(request.url, headers=request.headers, timeout=request.timeout)
    except requests.RequestException as e:
        log.warning("%s request to %s failed: %s", request.operation.value, request.url, e)
        return RawReply(status_code=0, reason=str(e))

    log.info("%s %s → HTTP %d", request.operation.value, request.url, resp.status_code)
    return RawReply(status_code=resp.status_code, body=resp.content, reason=resp.reason or "")


# Shared sessions, keyed by verify_peer
_sessions = {True: create_session(True), False: create_session(False)}
