"""
Non-blocking request dispatch with completions delivered on the main thread.

send() starts a short-lived daemon thread per request. The thread never
touches session state or Tkinter: it puts (callback, reply) on a queue that
the main loop drains via root.after(). Callbacks therefore run on the main
thread in the order replies arrive.
"""

import queue
import threading

from .config import log
from . import http_client
from .state import RawReply


class ThreadedTransport:

    def __init__(self):
        self._completions = queue.Queue()

    def send(self, request, on_complete):
        """Dispatch request; on_complete(RawReply) runs later on the main thread."""

        def do_call():
            try:
                reply = http_client.execute(request)
            except Exception as e:
                log.error("%s worker error: %s", request.operation.value, e, exc_info=True)
                reply = RawReply(status_code=0, reason=str(e))
            self._completions.put((on_complete, reply))

        threading.Thread(
            target=do_call,
            name=f"portal-{request.operation.value}",
            daemon=True,
        ).start()

    def post(self, callback, *args):
        """Run callback(*args) on the main thread (used by non-Tk threads)."""
        self._completions.put((callback, *args))

    def drain(self, max_items=50):
        """Run pending completions. Main thread only. Returns how many ran."""
        ran = 0
        while ran < max_items:
            try:
                item = self._completions.get_nowait()
            except queue.Empty:
                break
            callback, args = item[0], item[1:]
            ran += 1
            try:
                callback(*args)
            except Exception as e:
                log.error("Completion callback error: %s", e, exc_info=True)
        return ran
