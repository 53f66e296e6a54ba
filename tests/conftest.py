"""Pytest hooks and fixtures."""

import os

import pytest


def pytest_configure(config):
    """Register custom markers (also in pyproject.toml)."""
    config.addinivalue_line(
        "markers",
        "network: talks to a real TT-RSS server (skipped unless TTRSS_URL is set)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip network tests when no live server is configured."""
    if os.environ.get("TTRSS_URL"):
        return
    skip = pytest.mark.skip(reason="Requires a live TT-RSS server (set TTRSS_URL)")
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def endpoint() -> str:
    return "https://rss.example.org/tt-rss/api/"
