"""Client for the Tiny Tiny RSS JSON API."""

from __future__ import annotations

from typing import Any, Mapping

from loguru import logger

from ttrss_client.config.schema import ClientConfig
from ttrss_client.protocol.envelope import Parameters, build_envelope
from ttrss_client.protocol.response import Result, ServiceError, Success, classify_response
from ttrss_client.session import SessionContext
from ttrss_client.transport.http import HttpTransport
from ttrss_client.utils.exceptions import DecodeError


class TTRSSClient:
    """Runs operations against a TT-RSS endpoint.

    The client holds no session state: every call takes a ``SessionContext``
    and ``login``/``logout`` hand back new ones. Service-level failures come
    back as ``ServiceError`` values; ``TransportError`` and ``DecodeError`` are
    raised. Nothing is retried here, since several operations (label and
    read-state toggles) are not idempotent.
    """

    def __init__(self, transport: HttpTransport | None = None, settings: ClientConfig | None = None):
        if transport is None:
            transport = HttpTransport.from_config(settings) if settings is not None else HttpTransport()
        self.transport = transport

    def call(
        self,
        session: SessionContext,
        operation: str,
        parameters: Parameters | None = None,
        *,
        timeout: float | None = None,
        **params: Any,
    ) -> Result:
        """Invoke ``operation`` with the session's token and the given parameters.

        Parameters may be passed as a mapping/pair sequence, as keyword
        arguments, or both.
        """
        pairs = list(parameters.items() if isinstance(parameters, Mapping) else parameters or [])
        pairs.extend(params.items())
        envelope = build_envelope(operation, session.session_id, pairs)
        raw = self.transport.send(session.endpoint, envelope, timeout=timeout)
        result = classify_response(raw)
        if isinstance(result, ServiceError):
            logger.warning(f"ttrss op={operation} service error: {result.code}")
        return result

    def login(self, endpoint: str, user: str, password: str) -> SessionContext | ServiceError:
        """Authenticate and return a session carrying the new token.

        Servers from version 1.6.0 include ``api_level`` in the login reply; it is
        kept on the returned session when present.
        """
        anonymous = SessionContext.anonymous(endpoint)
        result = self.call(anonymous, "login", {"user": user, "password": password})
        if isinstance(result, ServiceError):
            return result
        session_id = result.get("session_id")
        if not isinstance(session_id, str) or not session_id:
            raise DecodeError("login response has no session_id")
        api_level = result.get("api_level")
        if not isinstance(api_level, int) or isinstance(api_level, bool):
            api_level = None
        logger.info(f"ttrss logged in to {endpoint} (api_level={api_level})")
        return anonymous.with_session(session_id, api_level)

    def logout(self, session: SessionContext) -> SessionContext | ServiceError:
        """End the server-side session; returns the session without its token."""
        result = self.call(session, "logout")
        if isinstance(result, ServiceError):
            return result
        logger.info(f"ttrss logged out of {session.endpoint}")
        return session.cleared()

    def get_api_level(self, session: SessionContext) -> int | ServiceError:
        result = self.call(session, "getApiLevel")
        if isinstance(result, ServiceError):
            return result
        return _int_field(result, "level")

    def is_logged_in(self, session: SessionContext) -> bool | ServiceError:
        result = self.call(session, "isLoggedIn")
        if isinstance(result, ServiceError):
            return result
        status = result.get("status")
        if not isinstance(status, bool):
            raise DecodeError("isLoggedIn response has no boolean status")
        return status


def _int_field(result: Success, key: str) -> int:
    value = result.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise DecodeError(f"response field {key!r} is not an integer")
    try:
        return int(value)
    except ValueError as exc:
        raise DecodeError(f"response field {key!r} is not an integer") from exc
