"""
LoginForm — the main window: gateway URL, credentials, keepalive options.

Lives on the Tk root window. It only reads and writes its own widgets;
the session never reaches in here. LogonApp decides when to show/hide it.
"""

import tkinter as tk
from tkinter import messagebox

from .config import parse_poll_interval
from .constants import (
    APP_TITLE, LOGON_VERSION, MAX_POLL_INTERVAL_SEC, MIN_POLL_INTERVAL_SEC, THEME,
)
from .request_builder import Credentials


class LoginForm:

    def __init__(self, root, settings, on_submit, on_close):
        self._root = root
        self._on_submit = on_submit
        self._endpoint_style = settings["endpoint_style"]
        self._saved_interval = settings["poll_interval"]

        self._url_var = tk.StringVar(value=settings["base_url"])
        self._user_var = tk.StringVar(value=settings["username"])
        self._pass_var = tk.StringVar(value="")
        self._poll_var = tk.StringVar(value=str(settings["poll_interval"]))
        self._validate_var = tk.BooleanVar(value=settings["validate_tls"])

        self._build_ui()
        root.protocol("WM_DELETE_WINDOW", on_close)

    # ─── UI construction ─────────────────────────────────────

    def _build_ui(self):
        root = self._root
        root.title(APP_TITLE)
        root.configure(bg=THEME["bg"])
        root.resizable(False, False)

        header = tk.Frame(root, bg=THEME["header_bg"], height=56)
        header.pack(fill="x")
        header.pack_propagate(False)
        tk.Label(header, text=APP_TITLE, font=("Segoe UI", 14, "bold"),
                 fg="white", bg=THEME["header_bg"]).pack(expand=True)

        body = tk.Frame(root, bg=THEME["bg"], padx=30, pady=20)
        body.pack(fill="both", expand=True)

        self._url_entry = self._labeled_entry(body, "Gateway URL", self._url_var)
        self._user_entry = self._labeled_entry(body, "Username", self._user_var)
        self._pass_entry = self._labeled_entry(body, "Password", self._pass_var, show="•")

        tk.Label(body, text="Keepalive interval (seconds)", font=("Segoe UI", 10, "bold"),
                 bg=THEME["bg"], fg=THEME["text_primary"]).pack(anchor="w")
        tk.Spinbox(body, from_=MIN_POLL_INTERVAL_SEC, to=MAX_POLL_INTERVAL_SEC,
                   textvariable=self._poll_var, font=("Segoe UI", 11), width=8).pack(
            anchor="w", pady=(4, 12))

        tk.Checkbutton(body, text="Validate server certificates", variable=self._validate_var,
                       bg=THEME["bg"], fg=THEME["text_primary"],
                       activebackground=THEME["bg"]).pack(anchor="w", pady=(0, 12))

        self._login_btn = tk.Button(
            body, text="Log In", font=("Segoe UI", 12, "bold"),
            bg=THEME["primary"], fg="white",
            activebackground=THEME["primary_hover"], activeforeground="white",
            relief="flat", padx=20, pady=8, cursor="hand2",
            command=self._submit,
        )
        self._login_btn.pack(fill="x")

        tk.Label(body, text=f"v{LOGON_VERSION}", font=("Segoe UI", 8),
                 bg=THEME["bg"], fg=THEME["text_muted"]).pack(anchor="e", pady=(8, 0))

        root.bind("<Return>", lambda e: self._submit())
        focus = self._pass_entry if self._user_var.get() and self._url_var.get() else self._url_entry
        focus.focus_set()

    def _labeled_entry(self, parent, label, var, show=None):
        tk.Label(parent, text=label, font=("Segoe UI", 10, "bold"),
                 bg=THEME["bg"], fg=THEME["text_primary"]).pack(anchor="w")
        entry = tk.Entry(parent, textvariable=var, font=("Segoe UI", 11), show=show,
                         bg=THEME["bg_input"], fg=THEME["text_primary"],
                         relief="solid", borderwidth=1,
                         highlightbackground=THEME["border"],
                         highlightcolor=THEME["primary"])
        entry.pack(fill="x", pady=(4, 12))
        return entry

    def _submit(self):
        if str(self._login_btn["state"]) == "disabled":
            return
        self._on_submit()

    # ─── Field access ────────────────────────────────────────

    @property
    def base_url(self):
        return self._url_var.get().strip()

    def credentials(self):
        return Credentials(self._user_var.get(), self._pass_var.get())

    def settings(self):
        """
        Current non-secret field values, in the shape config.save_settings takes.
        An interval that is not a whole number in range keeps the loaded one.
        """
        interval = parse_poll_interval(self._poll_var.get(), self._saved_interval)
        return {
            "username": self._user_var.get().strip(),
            "base_url": self.base_url,
            "poll_interval": interval,
            "validate_tls": bool(self._validate_var.get()),
            "endpoint_style": self._endpoint_style,
        }

    # ─── Visibility / feedback ───────────────────────────────

    def set_busy(self, busy):
        self._login_btn.config(state="disabled" if busy else "normal")

    def show(self):
        self._root.deiconify()
        self._root.lift()

    def hide(self):
        self._root.withdraw()

    def show_error(self, message):
        messagebox.showerror("Error", message, parent=self._root)

    def show_info(self, message):
        messagebox.showinfo("Error", message, parent=self._root)
