"""
Exception hierarchy and error handling utilities for ttrss_client.

Provides:
- Custom exception classes with error codes
- Error categorization (retryable, timeout, fatal, validation, protocol)
- Safe error message formatting (no credential or session leak)

Service-level errors reported by the server are not exceptions; see
``ttrss_client.protocol.response.ServiceError``.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    RETRYABLE = "retryable"
    TIMEOUT = "timeout"
    FATAL = "fatal"
    VALIDATION = "validation"
    PROTOCOL = "protocol"


class TTRSSClientError(Exception):
    """Base exception for all ttrss_client errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class EnvelopeError(TTRSSClientError, ValueError):
    """Invalid operation name, session token or parameter handed to the envelope builder."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="ENVELOPE_ERROR", category=ErrorCategory.VALIDATION, details=details)


class TransportFailure(str, Enum):
    """Distinct ways a single HTTP request/response cycle can fail."""

    CONNECTION = "connection"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"


def is_retryable_status(status_code: int) -> bool:
    return status_code >= 500 or status_code in {408, 409, 425, 429}


class TransportError(TTRSSClientError):
    """Connectivity, timeout or HTTP-level failure talking to the endpoint."""

    def __init__(
        self,
        message: str,
        *,
        kind: TransportFailure,
        endpoint: str | None = None,
        status_code: int | None = None,
    ):
        if kind is TransportFailure.HTTP_STATUS:
            retryable = status_code is not None and is_retryable_status(status_code)
            category = ErrorCategory.RETRYABLE if retryable else ErrorCategory.FATAL
        elif kind is TransportFailure.TIMEOUT:
            retryable = True
            category = ErrorCategory.TIMEOUT
        else:
            retryable = True
            category = ErrorCategory.RETRYABLE
        super().__init__(
            message,
            code=f"TRANSPORT_{kind.name}",
            category=category,
            details={"kind": kind.value, "endpoint": endpoint, "status_code": status_code},
        )
        self.kind = kind
        self.endpoint = endpoint
        self.status_code = status_code
        self.retryable = retryable


class DecodeError(TTRSSClientError):
    """Response body is not a well-formed JSON object."""

    def __init__(self, message: str, body_excerpt: str = ""):
        super().__init__(
            message,
            code="DECODE_ERROR",
            category=ErrorCategory.PROTOCOL,
            details={"body_excerpt": body_excerpt},
        )
        self.body_excerpt = body_excerpt


_SENSITIVE_PATTERNS = [
    re.compile(
        r"(['\"]?(?:password|passwd|sid|session_id|api[_-]?key|token|secret)['\"]?\s*[=:]\s*)['\"]?[^\s'\",}&]+['\"]?",
        re.IGNORECASE,
    ),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"[a-zA-Z0-9]{32,}"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove credentials and session ids from error messages."""
    sanitized = _SENSITIVE_PATTERNS[0].sub(lambda m: m.group(1) + replacement, message)
    for pattern in _SENSITIVE_PATTERNS[1:]:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def body_excerpt(raw: bytes, limit: int = 200) -> str:
    """Short, sanitized text preview of a response body for errors and logs."""
    text = raw[: limit * 4].decode("utf-8", errors="replace").strip()
    return sanitize_error_message(text[:limit])
