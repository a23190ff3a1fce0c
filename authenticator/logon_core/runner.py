"""
Entry point.
"""

import sys

from .constants import APP_TITLE, LOGON_VERSION
from .config import log, safe_print, load_settings
from .app import LogonApp


def main():
    """Primary entry point. Returns the process exit code."""
    safe_print(f"{APP_TITLE} v{LOGON_VERSION}")
    safe_print()

    settings = load_settings()
    if settings["base_url"]:
        log.info("Loaded settings for %s at %s", settings["username"] or "?", settings["base_url"])

    app = LogonApp(settings)
    try:
        app.run()
    except KeyboardInterrupt:
        safe_print("\nStopped by user.")
    return 0


def run():
    sys.exit(main())
