"""
PortalSession — the login / keepalive / logout state machine.

    LOGGED_OUT ──submit_login──▶ LOGGING_IN ──Authenticated──▶ LOGGED_IN
        ▲                            │                             │
        │◀──SessionError/Transport───┘                             │
        │◀──────────────── expiry (error reply to a poll) ─────────┘
        │
        └◀── logout reply ── LOGGING_OUT ◀── logout() (from any state)

Runs entirely on the main thread. Requests go out through a transport whose
completions come back on the main thread; each reply is matched against the
handle currently held for its operation slot and discarded if it was
superseded (e.g. a poll still in flight when the user logs out).

The keepalive timer is started on entering LOGGED_IN and stopped on leaving
it, in one place (_transition), so it can only tick while logged in.

UI and process control stay outside: everything observable is reported
through a SessionListener.
"""

from .classifier import Authenticated, SessionError, TransportError, classify
from .config import log
from .constants import NETWORK_ERROR_MESSAGE
from .request_builder import (
    Credentials, Operation, SessionConfig, build_request, parse_target,
)
from .state import InFlightRequest, SessionState


class SessionListener:
    """Presentation-side hooks. Subclass and override what you need."""

    def on_state_changed(self, state):
        pass

    def on_status_updated(self, status):
        pass

    def on_error_message(self, message):
        pass

    def on_exit_requested(self):
        pass


class PortalSession:

    def __init__(self, transport, timer, listener=None, config=None, credentials_source=None):
        """
        transport           → object with send(PortalRequest, on_complete)
        timer               → object with start(interval_sec) / stop(), ticking poll_tick()
        listener            → SessionListener receiving all notifications
        credentials_source  → optional callable returning current Credentials;
                              read at every request build
        """
        self._transport = transport
        self._timer = timer
        self._listener = listener or SessionListener()
        self._config = config or SessionConfig()
        self._credentials_source = credentials_source
        self._credentials = None

        self._state = SessionState.LOGGED_OUT
        self._target = None
        self._in_flight = {}             # Operation → InFlightRequest
        self._exit_after_logout = False
        self._last_status = None

    # ─── Read-only views ─────────────────────────────────────

    @property
    def state(self):
        return self._state

    @property
    def last_status(self):
        return self._last_status

    @property
    def exit_pending(self):
        return self._exit_after_logout

    # ─── Commands ────────────────────────────────────────────

    def submit_login(self, base_url, credentials=None, config=None):
        """
        Start a login. Returns False if a session is already starting, active
        or being logged out. Raises ValidationError for a bad URL, before any
        state change or request.
        """
        if self._state is not SessionState.LOGGED_OUT:
            log.info("Login ignored while %s", self._state.value)
            return False

        config = config or self._config
        target = parse_target(base_url, config.endpoint_style)

        self._config = config
        self._target = target
        if credentials is not None:
            self._credentials = credentials

        self._transition(SessionState.LOGGING_IN)
        self._dispatch(Operation.LOGIN)
        return True

    def poll_tick(self):
        """Keepalive timer callback. Sends one poll unless one is pending."""
        if self._state is not SessionState.LOGGED_IN:
            log.error("Keepalive tick while %s — timer should be stopped", self._state.value)
            return False

        pending = self._in_flight.get(Operation.POLL)
        if pending is not None:
            log.warning("Skipping keepalive: poll #%d still pending after %.0fs",
                        pending.request_id, pending.age_seconds)
            return False

        self._dispatch(Operation.POLL)
        return True

    def logout(self, exit_after=False):
        """
        Log out from any state. Any login or poll still in flight is
        superseded. With exit_after, on_exit_requested() follows the logout
        reply (whatever it says).

        Returns False when no gateway was ever used, so there is nothing
        to send; an exit request is then honored immediately.
        """
        if exit_after:
            self._exit_after_logout = True

        if self._target is None:
            log.info("Logout requested before any gateway was used — nothing to send")
            if self._exit_after_logout:
                self._notify("on_exit_requested")
            return False

        if self._in_flight:
            log.info("Logout supersedes pending %s",
                     ", ".join(op.value for op in self._in_flight))
            self._in_flight.clear()

        self._transition(SessionState.LOGGING_OUT)
        self._dispatch(Operation.LOGOUT)
        return True

    # ─── Dispatch / completion ───────────────────────────────

    def _current_credentials(self):
        if self._credentials_source is not None:
            return self._credentials_source()
        return self._credentials or Credentials("", "")

    def _dispatch(self, operation):
        request = build_request(self._target, operation, self._current_credentials(), self._config)
        handle = InFlightRequest(operation)
        self._in_flight[operation] = handle
        log.info("Sending %s #%d to %s (verify_peer=%s)",
                 operation.value, handle.request_id, request.url, request.verify_peer)
        self._transport.send(request, lambda reply, h=handle: self._on_reply(h, reply))

    def _on_reply(self, handle, reply):
        if self._in_flight.get(handle.operation) is not handle:
            log.debug("Discarding stale %s reply #%d", handle.operation.value, handle.request_id)
            return
        del self._in_flight[handle.operation]

        outcome = classify(reply.status_code, reply.body, reply.reason)
        if handle.operation is Operation.LOGIN:
            self._on_login_result(outcome)
        elif handle.operation is Operation.POLL:
            self._on_poll_result(outcome)
        else:
            self._on_logout_result(outcome)

    def _on_login_result(self, outcome):
        if isinstance(outcome, Authenticated):
            log.info("Logged in to %s", self._target.base_url)
            self._transition(SessionState.LOGGED_IN)
            self._update_status(outcome.status)
        elif isinstance(outcome, SessionError):
            log.warning("Login rejected: %s", outcome.message)
            self._transition(SessionState.LOGGED_OUT)
            self._notify("on_error_message", outcome.message)
        else:
            log.warning("Login failed: HTTP %d %s", outcome.status_code, outcome.reason)
            self._transition(SessionState.LOGGED_OUT)
            self._notify("on_error_message", NETWORK_ERROR_MESSAGE)

    def _on_poll_result(self, outcome):
        if isinstance(outcome, Authenticated):
            self._update_status(outcome.status)
        elif isinstance(outcome, SessionError):
            # Background poll: expire quietly, no dialog for the user.
            log.info("Session expired: %s", outcome.message)
            self._transition(SessionState.LOGGED_OUT)
        elif isinstance(outcome, TransportError):
            log.warning("Keepalive failed: HTTP %d %s", outcome.status_code, outcome.reason)
            self._transition(SessionState.LOGGED_OUT)
            self._notify("on_error_message", NETWORK_ERROR_MESSAGE)

    def _on_logout_result(self, outcome):
        if isinstance(outcome, TransportError):
            log.warning("Logout reply: HTTP %d %s", outcome.status_code, outcome.reason)
        elif isinstance(outcome, SessionError):
            log.warning("Logout reply: %s", outcome.message)
        else:
            log.info("Logged out")

        self._transition(SessionState.LOGGED_OUT)
        if self._exit_after_logout:
            self._notify("on_exit_requested")

    # ─── State helpers ───────────────────────────────────────

    def _transition(self, new_state):
        old_state = self._state
        if new_state is old_state:
            return

        self._state = new_state
        if new_state is SessionState.LOGGED_IN:
            self._timer.start(self._config.poll_interval_sec)
        elif old_state is SessionState.LOGGED_IN:
            self._timer.stop()
            self._last_status = None

        log.info("Session %s → %s", old_state.value, new_state.value)
        self._notify("on_state_changed", new_state)

    def _update_status(self, status):
        if status is None:
            return
        self._last_status = status
        self._notify("on_status_updated", status)

    def _notify(self, hook, *args):
        try:
            getattr(self._listener, hook)(*args)
        except Exception as e:
            log.error("Listener %s failed: %s", hook, e, exc_info=True)
