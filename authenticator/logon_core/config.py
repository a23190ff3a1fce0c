"""
Paths, logging setup, settings load/save, safe_print.
"""

import os
import json
import sys
import logging
from pathlib import Path

from .constants import (
    DEFAULT_ENDPOINT_STYLE, DEFAULT_POLL_INTERVAL_SEC, ENDPOINT_STYLES,
    MAX_POLL_INTERVAL_SEC, MIN_POLL_INTERVAL_SEC,
)


# ─── Paths ───────────────────────────────────────────────────────
# Settings live next to the application, one file per installation.
if getattr(sys, 'frozen', False):
    BASE_DIR = Path(sys.executable).parent
else:
    BASE_DIR = Path(__file__).parent.parent

SETTINGS_FILE = BASE_DIR / "settings.json"
LOG_FILE = BASE_DIR / "logon.log"


# ─── Safe print (no crash when --noconsole) ──────────────────────

def safe_print(*args, **kwargs):
    try:
        print(*args, **kwargs)
    except Exception:
        pass


# ─── Logging ─────────────────────────────────────────────────────

try:
    if LOG_FILE.exists() and LOG_FILE.stat().st_size > 1_000_000:
        LOG_FILE.write_text("")
except OSError:
    pass

try:
    logging.basicConfig(
        filename=str(LOG_FILE),
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        encoding="utf-8",
    )
except OSError:
    # Read-only install dir: console logging only.
    logging.basicConfig(level=logging.INFO, handlers=[logging.NullHandler()])
log = logging.getLogger("logon")

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.INFO)
console_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
log.addHandler(console_handler)


# ─── Settings ────────────────────────────────────────────────────

def default_username():
    """The login name of the desktop user, used to prefill the form."""
    if sys.platform == "win32":
        return os.environ.get("USERNAME", "")
    return os.environ.get("USER", "")


def default_settings():
    return {
        "username": default_username(),
        "base_url": "",
        "poll_interval": DEFAULT_POLL_INTERVAL_SEC,
        "validate_tls": False,
        "endpoint_style": DEFAULT_ENDPOINT_STYLE,
    }


def parse_poll_interval(value, default=None):
    """Seconds as an int, or default when value is not a whole number in range."""
    try:
        seconds = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    if seconds < MIN_POLL_INTERVAL_SEC or seconds > MAX_POLL_INTERVAL_SEC:
        return default
    return seconds


def load_settings(path=None):
    """
    Load persisted settings, filling defaults for anything missing or broken.
    Never raises: a corrupt file behaves like a missing one.
    """
    path = Path(path) if path else SETTINGS_FILE
    settings = default_settings()
    if not path.exists():
        return settings

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        log.warning("Ignoring unreadable settings file %s: %s", path, e)
        return settings
    if not isinstance(raw, dict):
        log.warning("Ignoring settings file %s: not a JSON object", path)
        return settings

    username = str(raw.get("username", "") or "").strip()
    if username:
        settings["username"] = username

    base_url = str(raw.get("base_url", "") or "").strip()
    if base_url:
        settings["base_url"] = base_url

    interval = parse_poll_interval(raw.get("poll_interval", ""))
    if interval is not None:
        settings["poll_interval"] = interval

    # Stored as text; only "false" disables validation. Hand-edited JSON may hold a bool.
    validate = raw.get("validate_tls", "false")
    if isinstance(validate, bool):
        settings["validate_tls"] = validate
    else:
        settings["validate_tls"] = str(validate).strip().lower() != "false"

    style = raw.get("endpoint_style", DEFAULT_ENDPOINT_STYLE)
    if style in ENDPOINT_STYLES:
        settings["endpoint_style"] = style

    return settings


def save_settings(settings, path=None):
    """
    Persist the non-secret form fields. The password is never written.
    Returns False (logged) when the file cannot be written.
    """
    path = Path(path) if path else SETTINGS_FILE
    data = {
        "username": settings.get("username", ""),
        "base_url": settings.get("base_url", ""),
        "poll_interval": int(settings.get("poll_interval", DEFAULT_POLL_INTERVAL_SEC)),
        "validate_tls": "true" if settings.get("validate_tls") else "false",
        "endpoint_style": settings.get("endpoint_style", DEFAULT_ENDPOINT_STYLE),
    }
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        log.warning("Could not save settings to %s: %s", path, e)
        return False
    log.info("Settings saved to %s", path)
    return True
