"""Tests for ttrss_client.utils.exceptions module."""

from __future__ import annotations

import pytest

from ttrss_client.utils.exceptions import (
    TTRSSClientError,
    EnvelopeError,
    TransportError,
    TransportFailure,
    DecodeError,
    ErrorCategory,
    body_excerpt,
    is_retryable_status,
    sanitize_error_message,
)


class TestExceptionClasses:
    """Test custom exception classes."""

    def test_base_error_to_dict(self) -> None:
        exc = TTRSSClientError("test message", code="TEST_CODE")
        assert exc.to_dict() == {
            "error": "TEST_CODE",
            "message": "test message",
            "category": ErrorCategory.FATAL.value,
            "details": {},
        }
        assert str(exc) == "[TEST_CODE] test message"

    def test_envelope_error_is_value_error(self) -> None:
        exc = EnvelopeError("bad name", field="op")
        assert isinstance(exc, ValueError)
        assert exc.code == "ENVELOPE_ERROR"
        assert exc.category == ErrorCategory.VALIDATION
        assert exc.details == {"field": "op"}

    def test_transport_timeout(self) -> None:
        exc = TransportError("slow", kind=TransportFailure.TIMEOUT, endpoint="https://x/api/")
        assert exc.code == "TRANSPORT_TIMEOUT"
        assert exc.category == ErrorCategory.TIMEOUT
        assert exc.retryable is True
        assert exc.details == {"kind": "timeout", "endpoint": "https://x/api/", "status_code": None}

    def test_transport_connection(self) -> None:
        exc = TransportError("refused", kind=TransportFailure.CONNECTION)
        assert exc.code == "TRANSPORT_CONNECTION"
        assert exc.category == ErrorCategory.RETRYABLE

    def test_transport_http_status(self) -> None:
        exc = TransportError("forbidden", kind=TransportFailure.HTTP_STATUS, status_code=403)
        assert exc.code == "TRANSPORT_HTTP_STATUS"
        assert exc.category == ErrorCategory.FATAL
        assert exc.retryable is False
        assert exc.status_code == 403

    def test_decode_error(self) -> None:
        exc = DecodeError("not json", body_excerpt="<html>")
        assert exc.code == "DECODE_ERROR"
        assert exc.category == ErrorCategory.PROTOCOL
        assert exc.details == {"body_excerpt": "<html>"}

    def test_error_kinds_are_disjoint(self) -> None:
        assert not issubclass(TransportError, DecodeError)
        assert not issubclass(DecodeError, TransportError)
        assert not issubclass(EnvelopeError, TransportError)


@pytest.mark.parametrize(
    "status,expected",
    [(500, True), (502, True), (408, True), (409, True), (425, True), (429, True), (400, False), (401, False), (404, False)],
)
def test_is_retryable_status(status: int, expected: bool) -> None:
    assert is_retryable_status(status) is expected


class TestSanitize:
    def test_password_assignment(self) -> None:
        assert sanitize_error_message("login failed password=hunter2") == "login failed password=[REDACTED]"

    def test_json_session_id(self) -> None:
        out = sanitize_error_message('{"session_id":"abc123","api_level":15}')
        assert "abc123" not in out
        assert "api_level" in out

    def test_sid_field(self) -> None:
        assert "tok42" not in sanitize_error_message('{"op":"getFeeds","sid":"tok42"}')

    def test_bearer_token(self) -> None:
        assert "eyJhbGciOi" not in sanitize_error_message("Authorization: Bearer eyJhbGciOi.abc")

    def test_long_opaque_strings(self) -> None:
        assert "a" * 40 not in sanitize_error_message("token " + "a" * 40)

    def test_plain_text_untouched(self) -> None:
        assert sanitize_error_message("502 Bad Gateway") == "502 Bad Gateway"


def test_body_excerpt_truncates_and_decodes_leniently() -> None:
    raw = b"\xff" + b"x" * 500
    text = body_excerpt(raw, limit=50)
    assert len(text) <= 50
    assert "�" in text
