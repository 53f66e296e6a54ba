"""Utility functions for ttrss_client."""

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

__all__ = [
    "TTRSSClientError",
    "EnvelopeError",
    "TransportError",
    "TransportFailure",
    "DecodeError",
    "ErrorCategory",
    "body_excerpt",
    "is_retryable_status",
    "sanitize_error_message",
]
