from __future__ import annotations

import base64

import pytest

from logon_core.request_builder import (
    Credentials, Operation, SessionConfig, ValidationError, build_request, parse_target,
)


def test_parse_target_appends_usermapping_paths():
    target = parse_target("https://gw.example.com/")
    assert target.url_for(Operation.LOGIN) == "https://gw.example.com/api/usermapping/session/login"
    assert target.url_for(Operation.POLL) == target.url_for(Operation.LOGIN)
    assert target.url_for(Operation.LOGOUT) == "https://gw.example.com/api/usermapping/session/logout"


def test_parse_target_without_scheme_defaults_to_http():
    target = parse_target("  10.0.0.1:8000 ")
    assert target.base_url == "http://10.0.0.1:8000"


def test_parse_target_legacy_style():
    target = parse_target("https://portal.lan", endpoint_style="legacy")
    assert target.url_for(Operation.LOGIN) == "https://portal.lan"
    assert target.url_for(Operation.LOGOUT) == "https://portal.lan/logout"


@pytest.mark.parametrize("bad", ["", "   ", "http://gw:notaport", "http://gw:99999", "ftp://gw.example.com", "http://"])
def test_parse_target_rejects_invalid_input(bad):
    with pytest.raises(ValidationError) as exc:
        parse_target(bad)
    assert str(exc.value)


def test_parse_target_unknown_style():
    with pytest.raises(ValidationError):
        parse_target("https://gw", endpoint_style="nope")


def test_build_request_headers():
    target = parse_target("https://gw")
    req = build_request(target, Operation.LOGIN, Credentials("bob", "s3cr:t"), SessionConfig())
    assert req.headers["User-Agent"] == "OPNsense Authenticator"
    scheme, token = req.headers["Authorization"].split(" ", 1)
    assert scheme == "Basic"
    assert base64.b64decode(token).decode("utf-8") == "bob:s3cr:t"
    assert req.url == "https://gw/api/usermapping/session/login"


def test_login_unverified_by_default_even_when_validation_enabled():
    target = parse_target("https://gw")
    config = SessionConfig(validate_server_certs=True)
    creds = Credentials("u", "p")
    assert build_request(target, Operation.LOGIN, creds, config).verify_peer is False
    assert build_request(target, Operation.POLL, creds, config).verify_peer is True
    assert build_request(target, Operation.LOGOUT, creds, config).verify_peer is True


def test_login_verification_policy_is_configurable():
    config = SessionConfig(validate_server_certs=True, unverified_login=False)
    assert config.verify_peer(Operation.LOGIN) is True
    assert SessionConfig(validate_server_certs=False, unverified_login=False).verify_peer(Operation.LOGIN) is False


def test_password_not_in_repr():
    creds = Credentials("bob", "hunter2")
    req = build_request(parse_target("gw"), Operation.LOGIN, creds, SessionConfig())
    assert "hunter2" not in repr(creds)
    assert "hunter2" not in repr(req)


def test_session_config_from_settings():
    config = SessionConfig.from_settings({"poll_interval": 30, "validate_tls": True, "endpoint_style": "legacy"})
    assert config.poll_interval_sec == 30
    assert config.validate_server_certs is True
    assert config.endpoint_style == "legacy"


def test_session_config_rejects_non_positive_interval():
    with pytest.raises(ValidationError):
        SessionConfig(poll_interval_sec=0)
