"""Shared fixtures for scraper tests.

Playwright is never launched: pages, browsers and the driver are replaced with
AsyncMock objects that record the calls made against them.
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

from pin_scraper.scrapers.pagination import SCROLL_TO_BOTTOM_JS


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Drop PIN_SCRAPER_* variables so settings fall back to defaults."""
    for key in list(os.environ):
        if key.startswith("PIN_SCRAPER_"):
            monkeypatch.delenv(key)


def _make_page(extraction_result=None, url="https://www.pinterest.com/"):
    """Fake Playwright page whose extraction script returns ``extraction_result``."""
    page = MagicMock()
    page.url = url
    page.goto = AsyncMock()
    page.route = AsyncMock()
    page.close = AsyncMock()

    async def evaluate(script, *args):
        if script == SCROLL_TO_BOTTOM_JS:
            return None
        return extraction_result

    page.evaluate = AsyncMock(side_effect=evaluate)
    return page


def _make_session(page):
    """Fake BrowserSession handing out ``page``."""
    session = MagicMock()
    session.init = AsyncMock()
    session.close = AsyncMock()
    session.new_page = AsyncMock(return_value=page)
    session.release_page = AsyncMock()
    return session


@pytest.fixture
def fake_playwright():
    """Fake async_playwright() factory plus the driver and browser it yields."""
    browser = MagicMock()
    browser.close = AsyncMock()
    browser.new_page = AsyncMock(return_value=_make_page())

    driver = MagicMock()
    driver.chromium.launch = AsyncMock(return_value=browser)
    driver.stop = AsyncMock()

    factory = MagicMock()
    factory.return_value.start = AsyncMock(return_value=driver)
    return factory, driver, browser


@pytest.fixture
def search_cards():
    """Raw search-grid payloads as returned by the in-page script."""
    return [
        {
            "href": "/pin/111/",
            "src": "https://i.pinimg.com/236x/aa/bb/one.jpg",
            "dataSrc": None,
            "title": None,
        },
        {
            "href": "/ideas/posters/",
            "src": "https://i.pinimg.com/236x/aa/bb/ad.jpg",
            "dataSrc": None,
            "title": None,
        },
        {
            "href": "/pin/222/",
            "src": None,
            "dataSrc": "https://i.pinimg.com/236x/cc/dd/two.jpg",
            "title": None,
        },
        {"href": "/pin/333/", "src": None, "dataSrc": None, "title": None},
        {"href": None, "src": "https://i.pinimg.com/236x/ee/ff/x.jpg", "dataSrc": None, "title": None},
    ]


@pytest.fixture
def make_page():
    return _make_page


@pytest.fixture
def make_session():
    return _make_session
