"""Explicit session context passed by the call site on every request."""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, field_validator


class SessionContext(BaseModel):
    """Endpoint plus the session token issued by ``login``.

    Immutable; ``login``/``logout`` return new values instead of mutating.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: str
    session_id: str | None = None
    api_level: int | None = None

    @field_validator("endpoint")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        parts = urlsplit(value.strip())
        if parts.scheme not in {"http", "https"} or not parts.netloc:
            raise ValueError(f"endpoint must be an absolute http(s) URL, got {value!r}")
        return value.strip()

    @field_validator("session_id")
    @classmethod
    def _check_session_id(cls, value: str | None) -> str | None:
        if value is not None and not value:
            raise ValueError("session_id must be non-empty when set")
        return value

    @classmethod
    def anonymous(cls, endpoint: str) -> "SessionContext":
        return cls(endpoint=endpoint)

    @property
    def is_authenticated(self) -> bool:
        return self.session_id is not None

    def with_session(self, session_id: str, api_level: int | None = None) -> "SessionContext":
        return SessionContext(endpoint=self.endpoint, session_id=session_id, api_level=api_level)

    def cleared(self) -> "SessionContext":
        """Same endpoint, no token."""
        return SessionContext(endpoint=self.endpoint)

    def __repr_args__(self):
        for name, value in super().__repr_args__():
            if name == "session_id" and value is not None:
                value = "***"
            yield name, value
