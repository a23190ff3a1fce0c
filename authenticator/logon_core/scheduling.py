"""
Repeating keepalive timer on the Tk event loop.

Ticks run on the main thread, so stop() takes effect immediately: a tick
that has not started yet is cancelled via after_cancel() and can never run.
"""

from .config import log


class TkRepeatingTimer:

    def __init__(self, root, callback):
        self._root = root
        self._callback = callback
        self._after_id = None
        self._interval_ms = 0

    @property
    def active(self):
        return self._after_id is not None

    def start(self, interval_sec):
        """(Re)arm the timer; the first tick fires one interval from now."""
        self.stop()
        self._interval_ms = int(interval_sec * 1000)
        self._after_id = self._root.after(self._interval_ms, self._fire)
        log.info("Keepalive timer armed (every %ds)", interval_sec)

    def stop(self):
        if self._after_id is None:
            return
        try:
            self._root.after_cancel(self._after_id)
        except Exception as e:
            log.debug("after_cancel failed: %s", e)
        self._after_id = None
        log.info("Keepalive timer stopped")

    def _fire(self):
        # Re-arm before the callback so the callback may stop() us.
        self._after_id = self._root.after(self._interval_ms, self._fire)
        try:
            self._callback()
        except Exception as e:
            log.error("Keepalive tick error: %s", e, exc_info=True)
