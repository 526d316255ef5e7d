"""Tests for the scroll-and-wait pagination driver."""

import time
from unittest.mock import AsyncMock, call, patch

import pytest

from pin_scraper.scrapers.pagination import SCROLL_TO_BOTTOM_JS, scroll


@pytest.mark.asyncio
async def test_zero_scroll_count_does_nothing(make_page):
    """scroll_count=0 performs no scroll and no delay."""
    page = make_page()

    with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        await scroll(page, 0, 2000)

    page.evaluate.assert_not_called()
    mock_sleep.assert_not_called()


@pytest.mark.asyncio
async def test_performs_exactly_n_cycles(make_page):
    page = make_page()

    with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        await scroll(page, 4, 2000)

    assert page.evaluate.await_args_list == [call(SCROLL_TO_BOTTOM_JS)] * 4
    assert mock_sleep.await_args_list == [call(2.0)] * 4


@pytest.mark.asyncio
async def test_each_scroll_is_followed_by_its_delay(make_page):
    """Cycles alternate scroll, wait, scroll, wait; none overlap."""
    events = []
    page = make_page()
    page.evaluate = AsyncMock(side_effect=lambda script: events.append("scroll"))

    async def fake_sleep(seconds):
        events.append("wait")

    with patch("asyncio.sleep", side_effect=fake_sleep):
        await scroll(page, 3, 10)

    assert events == ["scroll", "wait"] * 3


@pytest.mark.asyncio
async def test_total_delay_covers_all_cycles(make_page):
    page = make_page()

    started = time.monotonic()
    await scroll(page, 2, 50)
    elapsed = time.monotonic() - started

    # Small tolerance for event loop clock resolution.
    assert elapsed >= 0.1 - 0.005
    assert page.evaluate.await_count == 2
