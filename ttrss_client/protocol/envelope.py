"""Request envelope construction.

An envelope is the JSON object POSTed to the API endpoint::

    {"op": "getHeadlines", "sid": "...", "feed_id": 12, "limit": 20}

The document is assembled as a dict and serialized with ``json.dumps``; user
input is never spliced into JSON text.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping, Union

from pydantic import BaseModel, ConfigDict

from ttrss_client.utils.exceptions import EnvelopeError

OP_FIELD = "op"
SESSION_FIELD = "sid"
LIST_SEPARATOR = ","

# Operations that are valid without a session token.
AUTH_OPERATIONS = frozenset({"login"})

Scalar = Union[str, int, bool]
ParamValue = Union[Scalar, list, tuple]
Parameters = Union[Mapping[str, ParamValue], Iterable[tuple[str, ParamValue]]]


class RequestEnvelope(BaseModel):
    """Immutable request document ready for the transport."""

    model_config = ConfigDict(frozen=True)

    op: str
    sid: str | None = None
    pairs: tuple[tuple[str, Scalar], ...] = ()

    @property
    def params(self) -> dict[str, Scalar]:
        """Parameter fields in insertion order (a fresh copy)."""
        return dict(self.pairs)

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {OP_FIELD: self.op}
        if self.sid is not None:
            doc[SESSION_FIELD] = self.sid
        doc.update(self.pairs)
        return doc

    def encode(self) -> bytes:
        return json.dumps(self.to_document(), ensure_ascii=False, separators=(",", ":")).encode("utf-8")

    def __repr_args__(self):
        for name, value in super().__repr_args__():
            if name == "sid" and value is not None:
                value = "***"
            elif name == "pairs":
                value = tuple((k, "***" if k == "password" else v) for k, v in value)
            yield name, value


def _render_list_item(name: str, item: Any) -> str:
    if isinstance(item, bool):
        return "true" if item else "false"
    if isinstance(item, int):
        return str(item)
    if isinstance(item, str):
        if not item:
            raise EnvelopeError(f"list item for {name!r} is an empty string", field=name)
        if LIST_SEPARATOR in item:
            raise EnvelopeError(f"list item for {name!r} contains a comma: {item!r}", field=name)
        return item
    raise EnvelopeError(f"unsupported list item type for {name!r}: {type(item).__name__}", field=name)


def _render_value(name: str, value: Any) -> Scalar:
    # bool is an int subclass; both are passed through as typed JSON values.
    if isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, (list, tuple)):
        return LIST_SEPARATOR.join(_render_list_item(name, item) for item in value)
    raise EnvelopeError(f"unsupported value type for {name!r}: {type(value).__name__}", field=name)


def _iter_pairs(parameters: Parameters | None) -> Iterable[tuple[str, Any]]:
    if parameters is None:
        return ()
    if isinstance(parameters, Mapping):
        return parameters.items()
    return parameters


def build_envelope(
    operation: str,
    session_token: str | None = None,
    parameters: Parameters | None = None,
) -> RequestEnvelope:
    """Build the request envelope for ``operation``.

    Raises ``EnvelopeError`` for an empty operation, a missing token on a
    non-auth operation, or a parameter that cannot be represented.
    """
    if not isinstance(operation, str) or not operation.strip():
        raise EnvelopeError("operation must be a non-empty string", field=OP_FIELD)
    if session_token is not None:
        if not isinstance(session_token, str) or not session_token:
            raise EnvelopeError("session token must be a non-empty string", field=SESSION_FIELD)
    elif operation not in AUTH_OPERATIONS:
        raise EnvelopeError(f"operation {operation!r} requires a session token", field=SESSION_FIELD)

    fields: dict[str, Scalar] = {}
    for name, value in _iter_pairs(parameters):
        if not isinstance(name, str) or not name:
            raise EnvelopeError(f"parameter name must be a non-empty string, got {name!r}")
        if name in (OP_FIELD, SESSION_FIELD):
            raise EnvelopeError(f"parameter name {name!r} is reserved", field=name)
        if name in fields:
            raise EnvelopeError(f"duplicate parameter {name!r}", field=name)
        fields[name] = _render_value(name, value)

    return RequestEnvelope(op=operation, sid=session_token, pairs=tuple(fields.items()))


def split_list_field(value: str) -> list[str]:
    """Inverse of list flattening: ``"1,2,3"`` -> ``["1", "2", "3"]``."""
    if value == "":
        return []
    return value.split(LIST_SEPARATOR)
