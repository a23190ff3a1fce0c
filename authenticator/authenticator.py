"""
OPNsense Network Logon — Desktop Client
=======================================
Logs this machine in to an OPNsense captive portal, keeps the session alive
from the system tray, and logs out on request or on exit.

The password is only held in memory; it is never written to disk or logged.

Usage:
    python authenticator.py
"""

from logon_core.runner import run


if __name__ == "__main__":
    run()
