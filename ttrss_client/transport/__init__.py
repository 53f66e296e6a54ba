"""HTTP transport for the TT-RSS API."""

from ttrss_client.transport.http import HttpTransport

__all__ = ["HttpTransport"]
