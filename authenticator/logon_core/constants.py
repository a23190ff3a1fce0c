"""
Constants, endpoint paths, timeouts, theme colors and user-facing messages.
"""

LOGON_VERSION = "1.2.0"

USER_AGENT = "OPNsense Authenticator"
APP_TITLE = "OPNsense Network Logon"

# ─── Endpoints ───────────────────────────────────────────────────
# "usermapping" is the current API; "legacy" gateways answer on the
# base URL itself and log out on /logout.
ENDPOINT_STYLES = {
    "usermapping": {
        "login": "/api/usermapping/session/login",
        "logout": "/api/usermapping/session/logout",
    },
    "legacy": {
        "login": "",
        "logout": "/logout",
    },
}
DEFAULT_ENDPOINT_STYLE = "usermapping"

# ─── Timing ──────────────────────────────────────────────────────
DEFAULT_POLL_INTERVAL_SEC = 60   # Keepalive cadence while logged in
MIN_POLL_INTERVAL_SEC = 1
MAX_POLL_INTERVAL_SEC = 86400
API_TIMEOUT_SEC = 15             # Per request; shorter than any sane poll interval
COMPLETION_DRAIN_MS = 100        # How often the Tk loop drains worker results
LOGOUT_EXIT_TIMEOUT_SEC = 5      # Max wait for logout reply before quitting

# ─── Messages ────────────────────────────────────────────────────
NETWORK_ERROR_MESSAGE = "A network error occurred, your session will not be kept alive"
UNKNOWN = "unknown"
NO_GROUPS = "none"

# ─── Theme Colors ────────────────────────────────────────────────
THEME = {
    "bg":            "#f8fafc",   # window background
    "bg_input":      "#ffffff",   # entry background
    "header_bg":     "#d94f00",   # OPNsense orange
    "primary":       "#d94f00",   # login button
    "primary_hover": "#b34100",   # button hover
    "text_primary":  "#0f172a",   # labels
    "text_muted":    "#64748b",   # hints
    "border":        "#cbd5e1",   # entry borders
    "error":         "#ef4444",   # red
}
