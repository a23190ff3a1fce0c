"""
StatusDialog — shows what the gateway reported about the current session.

Created lazily on the main thread; hidden (withdrawn), not destroyed, when
closed so it can be reopened from the tray.
"""

import tkinter as tk

from .constants import APP_TITLE, THEME, UNKNOWN
from .config import log

_FIELDS = (
    ("username", "User"),
    ("groups", "Groups"),
    ("valid_until", "Valid until"),
    ("ip_address", "IP address"),
)


class StatusDialog:

    def __init__(self, root):
        self._root = root
        self._toplevel = None
        self._vars = {}

    def update(self, status):
        """Refresh the labels from a ServerStatus. Main thread only."""
        self._ensure_built()
        for name, _ in _FIELDS:
            self._vars[name].set(getattr(status, name, UNKNOWN))

    def clear(self):
        if self._toplevel is None:
            return
        for var in self._vars.values():
            var.set(UNKNOWN)
        self.hide()

    def show(self):
        self._ensure_built()
        self._toplevel.deiconify()
        self._toplevel.lift()

    def hide(self):
        if self._toplevel is not None:
            try:
                self._toplevel.withdraw()
            except tk.TclError:
                pass

    def _ensure_built(self):
        if self._toplevel is not None:
            return

        top = tk.Toplevel(self._root)
        self._toplevel = top
        top.title(f"{APP_TITLE} — Status")
        top.configure(bg=THEME["bg"], padx=24, pady=18)
        top.resizable(False, False)
        top.protocol("WM_DELETE_WINDOW", self.hide)
        top.withdraw()

        for row, (name, label) in enumerate(_FIELDS):
            self._vars[name] = tk.StringVar(value=UNKNOWN)
            tk.Label(top, text=label + ":", font=("Segoe UI", 10, "bold"),
                     bg=THEME["bg"], fg=THEME["text_primary"]).grid(
                row=row, column=0, sticky="w", pady=3, padx=(0, 12))
            tk.Label(top, textvariable=self._vars[name], font=("Segoe UI", 10),
                     bg=THEME["bg"], fg=THEME["text_primary"]).grid(
                row=row, column=1, sticky="w", pady=3)

        tk.Button(top, text="Close", command=self.hide, relief="flat",
                  bg=THEME["primary"], fg="white", padx=16, pady=4).grid(
            row=len(_FIELDS), column=0, columnspan=2, pady=(12, 0))

        log.info("Status dialog built")
