"""Tests for the JSON formatter: redaction and request context."""

import json
import logging

import pytest

from user_accounts.context import clear_context, set_request_context
from user_accounts.crosscutting.logger import JSONFormatter

pytestmark = pytest.mark.unit


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="user-accounts",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Usuario registrado",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_sensitive_fields_are_redacted():
    line = JSONFormatter().format(
        _record(
            username="alice",
            password="pw12345",
            password_hash="$argon2id$...",
            payload={"Authorization": "Bearer abc"},
        )
    )

    payload = json.loads(line)
    assert payload["username"] == "alice"
    assert payload["password"] == "***REDACTADO***"
    assert payload["password_hash"] == "***REDACTADO***"
    assert payload["payload"]["Authorization"] == "***REDACTADO***"
    assert "pw12345" not in line


def test_request_context_is_attached():
    set_request_context(request_id="rid-1", method="GET", path="/api/users")
    try:
        payload = json.loads(JSONFormatter().format(_record()))
    finally:
        clear_context()

    assert payload["request_id"] == "rid-1"
    assert payload["method"] == "GET"
    assert payload["path"] == "/api/users"
    assert payload["message"] == "Usuario registrado"


def test_credential_values_are_redacted_under_any_key():
    line = JSONFormatter().format(
        _record(detail="$argon2id$v=19$m=65536,t=3,p=4$abc", header="Bearer xyz")
    )

    payload = json.loads(line)
    assert payload["detail"] == "***REDACTADO***"
    assert payload["header"] == "***REDACTADO***"
    assert payload["service"] == "user-accounts"
