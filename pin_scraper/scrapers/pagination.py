"""Scroll-driven pagination for infinite-scroll pages."""

import asyncio
import logging

from playwright.async_api import Page

logger = logging.getLogger(__name__)

SCROLL_TO_BOTTOM_JS = "() => window.scrollTo(0, document.body.scrollHeight)"


async def scroll(page: Page, scroll_count: int, delay_ms: int) -> None:
    """Scroll to the bottom ``scroll_count`` times, pausing ``delay_ms`` after each.

    Cycles run strictly one after another. There is no end-of-feed detection:
    exactly ``scroll_count`` cycles are performed, and 0 performs none.
    """
    for cycle in range(scroll_count):
        await page.evaluate(SCROLL_TO_BOTTOM_JS)
        logger.debug(f"Scroll cycle {cycle + 1}/{scroll_count}, waiting {delay_ms}ms")
        await asyncio.sleep(delay_ms / 1000)
