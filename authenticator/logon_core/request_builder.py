"""
Request descriptors for the portal's login, keepalive poll and logout calls.

Pure construction: nothing here touches the network. The URL is validated
once per login attempt (parse_target) and every request is rebuilt from the
current credentials, so a password edited before login is picked up.
"""

import base64
import enum
from dataclasses import dataclass, field

from urllib3.exceptions import LocationParseError
from urllib3.util import parse_url

from .constants import (
    API_TIMEOUT_SEC, DEFAULT_ENDPOINT_STYLE, DEFAULT_POLL_INTERVAL_SEC,
    ENDPOINT_STYLES, USER_AGENT,
)


class ValidationError(ValueError):
    """Bad user input, detected locally before any request is sent."""


class Operation(enum.Enum):
    LOGIN = "login"
    POLL = "poll"
    LOGOUT = "logout"


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class SessionTarget:
    base_url: str
    login_path: str
    logout_path: str

    def url_for(self, operation):
        # The keepalive poll is a repeated login.
        if operation is Operation.LOGOUT:
            return self.base_url + self.logout_path
        return self.base_url + self.login_path


@dataclass(frozen=True)
class SessionConfig:
    poll_interval_sec: int = DEFAULT_POLL_INTERVAL_SEC
    validate_server_certs: bool = False
    # Log in without peer verification so portals with self-signed
    # certificates can be reached; polls and logout honor the flag above.
    unverified_login: bool = True
    endpoint_style: str = DEFAULT_ENDPOINT_STYLE

    def __post_init__(self):
        if int(self.poll_interval_sec) < 1:
            raise ValidationError(f"Poll interval must be positive, got {self.poll_interval_sec}")
        if self.endpoint_style not in ENDPOINT_STYLES:
            raise ValidationError(f"Unknown endpoint style: {self.endpoint_style}")

    @classmethod
    def from_settings(cls, settings):
        return cls(
            poll_interval_sec=int(settings.get("poll_interval", DEFAULT_POLL_INTERVAL_SEC)),
            validate_server_certs=bool(settings.get("validate_tls", False)),
            endpoint_style=settings.get("endpoint_style", DEFAULT_ENDPOINT_STYLE),
        )

    def verify_peer(self, operation):
        if operation is Operation.LOGIN and self.unverified_login:
            return False
        return self.validate_server_certs


@dataclass(frozen=True)
class PortalRequest:
    operation: Operation
    url: str
    headers: dict = field(repr=False)
    verify_peer: bool
    timeout: float = API_TIMEOUT_SEC


def parse_target(base_url, endpoint_style=DEFAULT_ENDPOINT_STYLE):
    """
    Validate user input into a SessionTarget.

    Input without a scheme is taken as plain http, the way a browser address
    bar reads "192.168.1.1". Raises ValidationError with the parser's message.
    """
    text = (base_url or "").strip()
    if not text:
        raise ValidationError("No gateway URL given")
    if "://" not in text:
        text = "http://" + text

    try:
        parsed = parse_url(text)
    except LocationParseError as e:
        raise ValidationError(str(e)) from e

    if parsed.scheme not in ("http", "https"):
        raise ValidationError(f"Unsupported scheme '{parsed.scheme}'")
    if not parsed.host:
        raise ValidationError(f"No host in '{text}'")

    paths = ENDPOINT_STYLES.get(endpoint_style)
    if paths is None:
        raise ValidationError(f"Unknown endpoint style: {endpoint_style}")

    return SessionTarget(
        base_url=parsed.url.rstrip("/"),
        login_path=paths["login"],
        logout_path=paths["logout"],
    )


def basic_auth_header(credentials):
    token = f"{credentials.username}:{credentials.password}".encode("utf-8")
    return "Basic " + base64.b64encode(token).decode("ascii")


def build_request(target, operation, credentials, config):
    """Build the GET request for one portal operation."""
    return PortalRequest(
        operation=operation,
        url=target.url_for(operation),
        headers={
            "Authorization": basic_auth_header(credentials),
            "User-Agent": USER_AGENT,
        },
        verify_peer=config.verify_peer(operation),
    )
