"""
Session state types — single source of truth for the logon lifecycle.

All mutations happen on the Tkinter main thread (PortalSession owns them).
No locks needed. Worker threads only ever see a PortalRequest and hand a
RawReply back through the completion queue.
"""

import enum
import itertools
import time
from dataclasses import dataclass, field

from .request_builder import Operation

_request_ids = itertools.count(1)


class SessionState(enum.Enum):
    LOGGED_OUT = "logged_out"
    LOGGING_IN = "logging_in"
    LOGGED_IN = "logged_in"
    LOGGING_OUT = "logging_out"


@dataclass(frozen=True)
class RawReply:
    """What the transport saw. status_code 0 means no HTTP response at all."""
    status_code: int
    body: bytes = b""
    reason: str = ""


@dataclass(eq=False)
class InFlightRequest:
    """
    Handle for one dispatched request. A reply is acted upon only while its
    handle is still the current one for the operation slot; superseding a
    request just drops the handle.
    """
    operation: Operation
    request_id: int = field(default_factory=lambda: next(_request_ids))
    dispatched_at: float = field(default_factory=time.monotonic)

    @property
    def age_seconds(self) -> float:
        return time.monotonic() - self.dispatched_at
