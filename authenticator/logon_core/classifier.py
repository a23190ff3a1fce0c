"""
Turns a finished portal reply (status code + body) into a session outcome.

Three outcomes only:
  Authenticated   → 200 without an "error" string (optionally with status)
  SessionError    → 200 with {"error": "<message>"}
  TransportError  → anything but 200, including connection failures (status 0)

Classification never raises; an unparseable 200 body counts as success
without status information.
"""

import json
from dataclasses import dataclass
from typing import Optional

from .constants import NO_GROUPS, UNKNOWN

_STATUS_FIELDS = ("username", "groups", "valid_until", "ip_address")


@dataclass(frozen=True)
class ServerStatus:
    username: str = UNKNOWN
    groups: str = UNKNOWN
    valid_until: str = UNKNOWN
    ip_address: str = UNKNOWN


@dataclass(frozen=True)
class Authenticated:
    status: Optional[ServerStatus] = None


@dataclass(frozen=True)
class SessionError:
    message: str


@dataclass(frozen=True)
class TransportError:
    status_code: int
    reason: str = ""


def _text(value):
    return value if isinstance(value, str) else UNKNOWN


def format_groups(value):
    """["a", "b"] → "a, b"; [] → "none"; anything unusable → "unknown"."""
    if not isinstance(value, list):
        return UNKNOWN
    if not value:
        return NO_GROUPS
    names = [g for g in value if isinstance(g, str)]
    return ", ".join(names) if names else UNKNOWN


def parse_status(doc):
    """ServerStatus from a reply object, or None unless all fields are present."""
    if not all(name in doc for name in _STATUS_FIELDS):
        return None
    return ServerStatus(
        username=_text(doc["username"]),
        groups=format_groups(doc["groups"]),
        valid_until=_text(doc["valid_until"]),
        ip_address=_text(doc["ip_address"]),
    )


def _load_object(body):
    try:
        doc = json.loads(body)
    except (ValueError, TypeError):
        return {}
    return doc if isinstance(doc, dict) else {}


def classify(status_code, body, reason=""):
    if status_code != 200:
        return TransportError(status_code=status_code, reason=reason)

    doc = _load_object(body or b"")
    error = doc.get("error")
    if isinstance(error, str):
        return SessionError(message=error)
    return Authenticated(status=parse_status(doc))
