"""Response decoding and classification.

Every API response is a JSON object. It is a service-level error when it
carries an ``error`` key::

    {"error": "NOT_LOGGED_IN"}

and a success otherwise, in which case the whole object is the payload.

Stock servers wrap every reply in a sequence/status envelope and put the
marker one level down::

    {"seq": 0, "status": 1, "content": {"error": "NOT_LOGGED_IN"}}

The marker is looked for in ``content`` too when the reply has that shape.
"""

from __future__ import annotations

import json
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from ttrss_client.utils.exceptions import DecodeError, body_excerpt

ERROR_FIELD = "error"
MESSAGE_FIELD = "message"
CONTENT_FIELD = "content"
WRAPPER_FIELDS = frozenset({"seq", "status", CONTENT_FIELD})

# Codes seen from TT-RSS servers. The set is open; unknown codes pass through.
API_DISABLED = "API_DISABLED"
LOGIN_ERROR = "LOGIN_ERROR"
NOT_LOGGED_IN = "NOT_LOGGED_IN"
INCORRECT_USAGE = "INCORRECT_USAGE"
UNKNOWN_METHOD = "UNKNOWN_METHOD"


class Success(BaseModel):
    """Well-formed response without an error marker."""

    model_config = ConfigDict(frozen=True)

    payload: dict[str, Any]

    @property
    def ok(self) -> bool:
        return True

    @property
    def content(self) -> Any:
        """The ``content`` value of a wrapped reply, else the whole payload."""
        if _is_wrapped(self.payload):
            return self.payload[CONTENT_FIELD]
        return self.payload

    def get(self, key: str, default: Any = None) -> Any:
        content = self.content
        if not isinstance(content, dict):
            content = self.payload
        return content.get(key, default)


class ServiceError(BaseModel):
    """Well-formed response explicitly reporting a business-level failure.

    Returned, not raised: expired sessions and disabled APIs are routine
    outcomes the caller branches on.
    """

    model_config = ConfigDict(frozen=True)

    code: str
    message: str | None = None
    document: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return False

    @property
    def is_not_logged_in(self) -> bool:
        return self.code == NOT_LOGGED_IN

    @property
    def is_api_disabled(self) -> bool:
        return self.code == API_DISABLED

    @property
    def is_login_error(self) -> bool:
        return self.code == LOGIN_ERROR


Result = Union[Success, ServiceError]


def _decode_document(raw: bytes) -> dict[str, Any]:
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"response body is not valid UTF-8: {exc.reason}", body_excerpt(raw)) from exc
    if not text.strip():
        raise DecodeError("response body is empty")
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"response body is not valid JSON: {exc.msg}", body_excerpt(raw)) from exc
    except RecursionError as exc:
        raise DecodeError("response body is nested too deeply to decode", body_excerpt(raw)) from exc
    if not isinstance(document, dict):
        raise DecodeError(
            f"response body is a JSON {type(document).__name__}, expected an object",
            body_excerpt(raw),
        )
    return document


def _is_wrapped(document: dict[str, Any]) -> bool:
    return WRAPPER_FIELDS.issubset(document)


def _error_code_and_message(document: dict[str, Any]) -> tuple[str, str | None]:
    marker = document[ERROR_FIELD]
    message = document.get(MESSAGE_FIELD)
    if isinstance(marker, str):
        code = marker
    elif isinstance(marker, dict) and isinstance(marker.get("code") or marker.get("error"), str):
        code = marker.get("code") or marker.get("error")
        if isinstance(marker.get("message"), str):
            message = marker["message"]
    else:
        code = json.dumps(marker, ensure_ascii=False, separators=(",", ":"))
    if not isinstance(message, str):
        message = None
    return code, message


def classify_response(raw: bytes) -> Result:
    """Decode ``raw`` and return ``Success`` or ``ServiceError``.

    Raises ``DecodeError`` when the body is not a JSON object.
    """
    document = _decode_document(raw)
    if ERROR_FIELD in document:
        code, message = _error_code_and_message(document)
        return ServiceError(code=code, message=message, document=document)
    inner = document[CONTENT_FIELD] if _is_wrapped(document) else None
    if isinstance(inner, dict) and ERROR_FIELD in inner:
        code, message = _error_code_and_message(inner)
        return ServiceError(code=code, message=message, document=document)
    return Success(payload=document)
