"""Configuration schema using Pydantic.

Optional defaults for applications built on the client, persisted to
~/.ttrss_client/config.json and overridable with TTRSS_* environment variables.
The protocol layer itself never reads configuration.
"""

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings

from ttrss_client.session import SessionContext
from ttrss_client.transport.http import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT


class ClientConfig(BaseSettings):
    """Root configuration for ttrss_client."""
    url: str = ""  # API endpoint, e.g. "https://example.org/tt-rss/api/"
    user: str = ""
    password: str = Field(default="", repr=False)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)  # Seconds, per request
    verify_ssl: bool = True
    follow_redirects: bool = False  # Only 307/308 are ever followed
    user_agent: str = DEFAULT_USER_AGENT

    model_config = ConfigDict(
        env_prefix="TTRSS_",
    )

    def session(self) -> SessionContext:
        """Anonymous session for the configured endpoint (call ``login`` next)."""
        if not self.url:
            raise ValueError("no endpoint configured (set url or TTRSS_URL)")
        return SessionContext.anonymous(self.url)
