"""
LogonApp — the main Tkinter application and presentation adapter.

Everything runs inside Tkinter's event loop via root.after():
  _drain()            — runs worker/tray completions on the main thread (every 100ms)
  keepalive timer     — PortalSession.poll_tick()                 (every poll_interval)

Background threads: ONLY short-lived request threads + the pystray loop.
None of them touch Tkinter or the session directly.
"""

import tkinter as tk

from .constants import COMPLETION_DRAIN_MS, LOGOUT_EXIT_TIMEOUT_SEC, LOGON_VERSION
from .config import log, save_settings
from .login_form import LoginForm
from .request_builder import SessionConfig, ValidationError
from .scheduling import TkRepeatingTimer
from .session import PortalSession, SessionListener
from .state import SessionState
from .status_dialog import StatusDialog
from .transport import ThreadedTransport


class LogonApp(SessionListener):
    """
    Owns the Tk main loop and every widget. Subscribes to PortalSession:
      LOGGING_IN   → login button disabled
      LOGGED_IN    → form hidden, settings saved, Status enabled
      LOGGED_OUT   → form shown again, Status disabled
    """

    def __init__(self, settings):
        self._settings = settings
        self._transport = ThreadedTransport()
        self._root = None
        self._form = None
        self._status = None
        self._tray = None
        self.session = None
        self._exiting = False

    def run(self):
        """Start the app. Blocks on Tk mainloop. Call from main thread."""
        # pystray selects a desktop backend on import.
        from .tray import TrayIcon

        root = tk.Tk()
        form = LoginForm(root, self._settings, self._on_login_clicked, self.quit)
        status = StatusDialog(root)
        timer = TkRepeatingTimer(root, lambda: self.session.poll_tick())
        session = PortalSession(
            self._transport,
            timer,
            listener=self,
            config=SessionConfig.from_settings(self._settings),
            credentials_source=form.credentials,
        )
        tray = TrayIcon(
            self._transport.post,
            on_status=status.show,
            on_logout=self.logout,
            on_logout_and_exit=self.logout_and_exit,
        )
        self.attach(root, form, status, tray, session)
        self._tray.start()

        self._root.after(COMPLETION_DRAIN_MS, self._drain)
        log.info("v%s started", LOGON_VERSION)

        try:
            self._root.mainloop()
        finally:
            self._tray.stop()
            log.info("LogonApp shut down.")

    def attach(self, root, form, status, tray, session):
        """Wire the widgets and the session this adapter drives."""
        self._root = root
        self._form = form
        self._status = status
        self._tray = tray
        self.session = session

    def quit(self):
        if self._exiting:
            return
        self._exiting = True
        try:
            self._root.quit()
        except tk.TclError:
            pass

    # ─── Completion queue (every 100ms) ──────────────────────

    def _drain(self):
        try:
            self._transport.drain()
        except Exception as e:
            log.error("_drain error: %s", e, exc_info=True)
        if not self._exiting:
            self._root.after(COMPLETION_DRAIN_MS, self._drain)

    # ─── User actions ────────────────────────────────────────

    def _on_login_clicked(self):
        form_settings = self._form.settings()
        if not form_settings["base_url"]:
            return
        try:
            self.session.submit_login(
                form_settings["base_url"],
                config=SessionConfig.from_settings(form_settings),
            )
        except ValidationError as e:
            log.info("Invalid URL entered: %s", e)
            self._form.show_info(f"Invalid URL: {e}")

    def logout(self):
        self.session.logout()

    def logout_and_exit(self):
        self.session.logout(exit_after=True)
        if not self._exiting:
            # Don't hang on an unreachable gateway.
            self._root.after(LOGOUT_EXIT_TIMEOUT_SEC * 1000, self._force_exit)

    def _force_exit(self):
        if not self._exiting:
            log.warning("No logout reply after %ds — exiting anyway", LOGOUT_EXIT_TIMEOUT_SEC)
            self.quit()

    # ─── SessionListener ─────────────────────────────────────

    def on_state_changed(self, state):
        self._form.set_busy(state in (SessionState.LOGGING_IN, SessionState.LOGGING_OUT))
        if state is SessionState.LOGGED_IN:
            self._form.hide()
            self._tray.set_status_enabled(True)
            self._settings = self._form.settings()
            save_settings(self._settings)
        elif state is SessionState.LOGGED_OUT:
            self._tray.set_status_enabled(False)
            self._status.clear()
            if not self.session.exit_pending:
                self._form.show()

    def on_status_updated(self, status):
        self._status.update(status)

    def on_error_message(self, message):
        self._form.show_error(message)

    def on_exit_requested(self):
        log.info("Exit requested")
        self.quit()
