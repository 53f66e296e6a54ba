"""Request envelope building and response classification."""

from ttrss_client.protocol.envelope import (
    AUTH_OPERATIONS,
    RequestEnvelope,
    build_envelope,
    split_list_field,
)
from ttrss_client.protocol.response import (
    API_DISABLED,
    INCORRECT_USAGE,
    LOGIN_ERROR,
    NOT_LOGGED_IN,
    UNKNOWN_METHOD,
    Result,
    ServiceError,
    Success,
    classify_response,
)

__all__ = [
    "AUTH_OPERATIONS",
    "RequestEnvelope",
    "build_envelope",
    "split_list_field",
    "API_DISABLED",
    "INCORRECT_USAGE",
    "LOGIN_ERROR",
    "NOT_LOGGED_IN",
    "UNKNOWN_METHOD",
    "Result",
    "ServiceError",
    "Success",
    "classify_response",
]
