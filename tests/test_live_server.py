"""Smoke test against a real TT-RSS server (set TTRSS_URL, TTRSS_USER, TTRSS_PASSWORD)."""

import pytest

from ttrss_client import ServiceError, SessionContext, Success, TTRSSClient
from ttrss_client.config import ClientConfig


@pytest.mark.network
def test_login_api_level_logout() -> None:
    config = ClientConfig()
    client = TTRSSClient(settings=config)
    session = client.login(config.url, config.user, config.password)
    if isinstance(session, ServiceError):
        pytest.fail(f"login failed: {session.code}")
    try:
        level = client.get_api_level(session)
        assert isinstance(level, int)
        assert client.is_logged_in(session) is True
        feeds = client.call(session, "getFeeds", cat_id=-4)
        assert isinstance(feeds, Success)
        # Stock servers reply {"seq": 0, "status": 0, "content": [...]}.
        assert isinstance(feeds.payload.get("content"), list)
    finally:
        logged_out = client.logout(session)
    assert isinstance(logged_out, SessionContext)
    assert logged_out.session_id is None
    stale = client.call(session, "getFeeds", cat_id=-4)
    assert isinstance(stale, ServiceError)
    assert stale.is_not_logged_in
