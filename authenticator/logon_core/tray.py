"""
System tray icon (pystray) with Status / Log Out / Log Out and Exit.

pystray runs its own loop on a background thread. Menu callbacks never touch
Tkinter or the session directly: they are posted to the main thread through
the transport's completion queue.
"""

import threading

from PIL import Image, ImageDraw
from pystray import Icon, Menu, MenuItem

from .constants import APP_TITLE, THEME
from .config import log


def create_image():
    img = Image.new("RGBA", (64, 64), (0, 0, 0, 0))
    d = ImageDraw.Draw(img)
    d.ellipse((6, 6, 58, 58), fill=THEME["header_bg"])
    d.ellipse((22, 22, 42, 42), fill="white")
    return img


class TrayIcon:

    def __init__(self, post, on_status, on_logout, on_logout_and_exit):
        """post(callback) must schedule callback on the main thread."""
        self._post = post
        self._on_status = on_status
        self._on_logout = on_logout
        self._on_logout_and_exit = on_logout_and_exit
        self._status_enabled = False
        self._icon = None

    def start(self):
        menu = Menu(
            MenuItem("&Status", self._status_clicked, enabled=lambda item: self._status_enabled),
            MenuItem("&Log Out", self._logout_clicked),
            MenuItem("Log Out and &Exit", self._exit_clicked),
        )
        self._icon = Icon("opnsense-logon", create_image(), APP_TITLE, menu)
        threading.Thread(target=self._icon.run, name="tray", daemon=True).start()
        log.info("Tray icon started")

    def stop(self):
        if self._icon is None:
            return
        try:
            self._icon.stop()
        except Exception as e:
            log.debug("Tray stop failed: %s", e)
        self._icon = None

    def set_status_enabled(self, enabled):
        """Main thread. Status is only meaningful while logged in."""
        self._status_enabled = enabled
        if self._icon is not None:
            self._icon.update_menu()

    # ─── pystray thread → main thread ────────────────────────

    def _status_clicked(self, icon, item):
        self._post(self._on_status)

    def _logout_clicked(self, icon, item):
        self._post(self._on_logout)

    def _exit_clicked(self, icon, item):
        self._post(self._on_logout_and_exit)
