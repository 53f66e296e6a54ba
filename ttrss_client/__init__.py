"""
ttrss_client - client for the Tiny Tiny RSS JSON API
"""

__version__ = "0.1.0"

from ttrss_client.client import TTRSSClient
from ttrss_client.protocol import (
    RequestEnvelope,
    ServiceError,
    Success,
    build_envelope,
    classify_response,
)
from ttrss_client.session import SessionContext
from ttrss_client.transport import HttpTransport
from ttrss_client.utils.exceptions import (
    DecodeError,
    EnvelopeError,
    TransportError,
    TransportFailure,
    TTRSSClientError,
)

__all__ = [
    "TTRSSClient",
    "SessionContext",
    "HttpTransport",
    "RequestEnvelope",
    "Success",
    "ServiceError",
    "build_envelope",
    "classify_response",
    "TTRSSClientError",
    "EnvelopeError",
    "TransportError",
    "TransportFailure",
    "DecodeError",
]
