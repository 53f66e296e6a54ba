"""HTTP transport: one POST request/response cycle per call."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from loguru import logger

from ttrss_client.protocol.envelope import RequestEnvelope
from ttrss_client.utils.exceptions import (
    TransportError,
    TransportFailure,
    body_excerpt,
    sanitize_error_message,
)

if TYPE_CHECKING:
    from ttrss_client.config.schema import ClientConfig

DEFAULT_TIMEOUT = 20.0
DEFAULT_USER_AGENT = "ttrss-client/0.1"
MAX_REDIRECTS = 5
# 301/302/303 make httpx (and browsers) resend a POST as a bodyless GET.
METHOD_PRESERVING_REDIRECTS = frozenset({307, 308})


class HttpTransport:
    """Sends an encoded envelope to the endpoint and returns the raw body.

    Holds only immutable settings; each ``send`` opens and closes its own
    ``httpx.Client``. No retries.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        verify: bool = True,
        follow_redirects: bool = False,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.timeout = timeout
        self.verify = verify
        self.follow_redirects = follow_redirects
        self.user_agent = user_agent
        self._transport = transport

    @classmethod
    def from_config(cls, config: "ClientConfig", transport: httpx.BaseTransport | None = None) -> "HttpTransport":
        return cls(
            timeout=config.timeout,
            verify=config.verify_ssl,
            follow_redirects=config.follow_redirects,
            user_agent=config.user_agent,
            transport=transport,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json; charset=utf-8",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    def send(self, endpoint: str, envelope: RequestEnvelope, timeout: float | None = None) -> bytes:
        """POST ``envelope`` to ``endpoint`` and return the complete response body.

        Raises ``TransportError`` with kind CONNECTION, TIMEOUT or HTTP_STATUS.
        Only 307/308 redirects are followed (and only when enabled), since other
        3xx codes turn the POST into a bodyless GET.
        """
        effective_timeout = self.timeout if timeout is None else timeout
        body = envelope.encode()
        op = envelope.op
        url = endpoint
        try:
            with httpx.Client(
                timeout=effective_timeout,
                verify=self.verify,
                follow_redirects=False,
                transport=self._transport,
            ) as client:
                for _ in range(MAX_REDIRECTS + 1):
                    with client.stream("POST", url, content=body, headers=self._headers()) as resp:
                        status = resp.status_code
                        if self._should_follow(resp):
                            url = str(resp.url.join(resp.headers["Location"]))
                            logger.debug(f"ttrss op={op} redirected ({status}) to {url}")
                            continue
                        raw = self._read_body(resp, endpoint, op)
                        break
                else:
                    raise TransportError(
                        f"too many redirects: op={op}",
                        kind=TransportFailure.HTTP_STATUS,
                        endpoint=endpoint,
                        status_code=status,
                    )
        except TransportError as exc:
            logger.warning(f"ttrss request failed: endpoint={endpoint}: {exc.message}")
            raise
        except httpx.TimeoutException as exc:
            logger.warning(f"ttrss timeout: op={op} endpoint={endpoint}")
            raise TransportError(
                f"timed out after {effective_timeout}s: op={op}",
                kind=TransportFailure.TIMEOUT,
                endpoint=endpoint,
            ) from exc
        except (httpx.ReadError, httpx.RemoteProtocolError) as exc:
            # Connection dropped after the request went out: treated like a timeout
            # so a partial body is never handed to the decoder.
            logger.warning(f"ttrss response cut short: op={op} endpoint={endpoint}: {sanitize_error_message(str(exc))}")
            raise TransportError(
                f"response interrupted: op={op}: {sanitize_error_message(str(exc))}",
                kind=TransportFailure.TIMEOUT,
                endpoint=endpoint,
            ) from exc
        except httpx.RequestError as exc:
            logger.warning(f"ttrss connection error: op={op} endpoint={endpoint}: {sanitize_error_message(str(exc))}")
            raise TransportError(
                f"connection failed: op={op}: {sanitize_error_message(str(exc))}",
                kind=TransportFailure.CONNECTION,
                endpoint=endpoint,
            ) from exc

        logger.debug(f"ttrss op={op} endpoint={endpoint} status={status} sent={len(body)}B received={len(raw)}B")
        return raw

    def _should_follow(self, resp: httpx.Response) -> bool:
        return (
            self.follow_redirects
            and resp.status_code in METHOD_PRESERVING_REDIRECTS
            and "Location" in resp.headers
        )

    @staticmethod
    def _read_body(resp: httpx.Response, endpoint: str, op: str) -> bytes:
        chunks: list[bytes] = []
        for chunk in resp.iter_bytes():
            chunks.append(chunk)
        raw = b"".join(chunks)

        # Content-Length counts encoded bytes, so only plain bodies can be checked here.
        declared = resp.headers.get("Content-Length")
        if (
            declared is not None
            and declared.isdigit()
            and "Content-Encoding" not in resp.headers
            and len(raw) < int(declared)
        ):
            raise TransportError(
                f"response cut short: op={op}: got {len(raw)} of {declared} bytes",
                kind=TransportFailure.TIMEOUT,
                endpoint=endpoint,
            )

        if not resp.is_success:
            raise TransportError(
                f"http error {resp.status_code}: op={op}: {body_excerpt(raw) or resp.reason_phrase}",
                kind=TransportFailure.HTTP_STATUS,
                endpoint=endpoint,
                status_code=resp.status_code,
            )
        return raw
