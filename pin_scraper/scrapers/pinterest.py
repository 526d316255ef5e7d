"""Browser-driven Pinterest extraction pipeline.

Every public operation follows the same shape: open a page, navigate and wait
for network quiescence, optionally paginate, run an in-page script that
returns plain data, normalize it, and release the page. The in-page scripts
only read attributes and text; all parsing happens in ``normalize``.
"""

import asyncio
import logging
from typing import Any
from urllib.parse import quote

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..config import SITE_ORIGIN, ScraperConfig
from ..errors import EvaluationError, NavigationError, NavigationTimeoutError
from ..models import Pin, Rejected, UserProfile
from ..services.browser_session import BrowserSession
from . import normalize
from .pagination import scroll

logger = logging.getLogger(__name__)

SEARCH_URL = SITE_ORIGIN + "/search/pins/?q={query}"
PROFILE_URL = SITE_ORIGIN + "/{username}/"

# Grid cards on search and board pages.
PIN_CARDS_JS = """
() => Array.from(document.querySelectorAll('[data-test-id="pin"]')).map((el) => {
    const img = el.querySelector("img");
    const link = el.querySelector("a");
    const title = el.querySelector('[data-test-id="pinTitle"]') || el.querySelector("h3");
    return {
        href: link ? link.getAttribute("href") : null,
        src: img ? img.getAttribute("src") : null,
        dataSrc: img ? img.getAttribute("data-src") : null,
        title: title ? title.textContent : null,
    };
})
"""

PIN_DETAILS_JS = """
() => {
    const text = (el) => (el ? el.textContent : null);
    const img = document.querySelector('[data-test-id="pin-closeup-image"] img')
        || document.querySelector("img[srcset]");
    const title = document.querySelector('[data-test-id="pinTitle"]')
        || document.querySelector("h1");
    const link = document.querySelector('[data-test-id="pin-closeup-link"] a');
    return {
        src: img ? img.getAttribute("src") : null,
        title: text(title),
        description: text(document.querySelector('[data-test-id="pin-closeup-description"]')),
        link: link ? link.getAttribute("href") : null,
        repins: text(document.querySelector('[data-test-id="save-count"]')),
    };
}
"""

USER_PROFILE_JS = """
() => {
    const text = (el) => (el ? el.textContent : null);
    const stats = document.querySelectorAll(
        '[data-test-id="profile-follower-count"], [data-test-id="profile-following-count"]'
    );
    const boards = Array.from(document.querySelectorAll('[data-test-id="board-row"]')).map((el) => {
        const name = el.querySelector('[data-test-id="board-name"]') || el.querySelector("h2");
        const link = el.querySelector("a");
        const img = el.querySelector("img");
        return {
            href: link ? link.getAttribute("href") : null,
            name: text(name),
            pinCount: text(el.querySelector('[data-test-id="board-pin-count"]')),
            src: img ? img.getAttribute("src") : null,
        };
    });
    return {
        fullName: text(document.querySelector('[data-test-id="profile-name"]')
            || document.querySelector("h1")),
        bio: text(document.querySelector('[data-test-id="profile-description"]')),
        followers: text(stats[0]),
        following: text(stats[1]),
        monthlyViews: text(document.querySelector('[data-test-id="monthly-views"]')),
        boards,
    };
}
"""


class PinterestScraper:
    """Scrape pins, boards and profiles through a headless browser.

    The scraper owns a BrowserSession unless one is passed in. Call ``init()``
    before any operation and ``close()`` once done, or use it as an async
    context manager.

    Args:
        config: Scraper settings, defaults to ``ScraperConfig()``.
        session: Existing browser session to drive.
    """

    def __init__(
        self, config: ScraperConfig | None = None, session: BrowserSession | None = None
    ) -> None:
        self.config = config or ScraperConfig()
        self.session = session or BrowserSession(self.config)

    async def __aenter__(self) -> "PinterestScraper":
        await self.init()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def init(self) -> None:
        await self.session.init()

    async def close(self) -> None:
        await self.session.close()

    async def _navigate(self, page: Page, url: str) -> None:
        """Load ``url`` and wait until the network goes quiet."""
        logger.debug(f"Navigating to {url}")
        try:
            await page.goto(
                url, wait_until="networkidle", timeout=self.config.navigation_timeout_ms
            )
        except PlaywrightTimeoutError as e:
            logger.error(f"Navigation timed out for {url}")
            raise NavigationTimeoutError(
                f"Navigation to {url} exceeded {self.config.navigation_timeout_ms}ms", url=url
            ) from e
        except PlaywrightError as e:
            logger.error(f"Navigation failed for {url}: {e}")
            raise NavigationError(f"Navigation to {url} failed: {e}", url=url) from e

    async def _paginate(self, page: Page) -> None:
        try:
            await scroll(page, self.config.scroll_count, self.config.delay_ms)
        except PlaywrightError as e:
            raise EvaluationError(f"Scrolling failed: {e}", url=page.url) from e

    async def _settle(self) -> None:
        await asyncio.sleep(self.config.settle_delay_ms / 1000)

    async def _evaluate(self, page: Page, script: str) -> Any:
        """Run an extraction script in the page and return its plain-data result."""
        try:
            return await page.evaluate(script)
        except PlaywrightError as e:
            logger.error(f"Extraction script failed on {page.url}: {e}")
            raise EvaluationError(f"Extraction script failed: {e}", url=page.url) from e

    async def search_pins(self, query: str) -> list[str]:
        """Search pins by keyword.

        Args:
            query: Free-text search terms.

        Returns:
            High-resolution image URLs of the pins found, in page order.
        """
        url = SEARCH_URL.format(query=quote(query, safe="!~*'()"))
        page = await self.session.new_page()
        try:
            await self._navigate(page, url)
            await self._paginate(page)
            cards = await self._evaluate(page, PIN_CARDS_JS)
        finally:
            await self.session.release_page(page)

        results = [normalize.build_search_result(card) for card in cards]
        skipped = normalize.rejected(results)
        if skipped:
            logger.debug(f"Skipped {len(skipped)} search cards without a pin id")

        images = [image for image in normalize.accepted(results) if image]
        logger.info(f"Search '{query}' returned {len(images)} pins")
        return images

    async def get_board_pins(self, board_url: str) -> list[Pin]:
        """Collect the pins of a board, e.g. https://www.pinterest.com/user/board/.

        Only id, title, image and pin URL are filled in; description and
        external link are left empty.
        """
        page = await self.session.new_page()
        try:
            await self._navigate(page, board_url)
            await self._paginate(page)
            cards = await self._evaluate(page, PIN_CARDS_JS)
        finally:
            await self.session.release_page(page)

        results = [normalize.build_board_pin(card) for card in cards]
        skipped = normalize.rejected(results)
        if skipped:
            logger.debug(f"Skipped {len(skipped)} board cards without a pin id")

        pins = normalize.accepted(results)
        logger.info(f"Board {board_url} returned {len(pins)} pins")
        return pins

    async def get_pin_details(self, pin_url: str) -> Pin | None:
        """Fetch a single pin page.

        Returns:
            The pin, or None when no pin id can be derived from ``pin_url``.
        """
        page = await self.session.new_page()
        try:
            await self._navigate(page, pin_url)
            await self._settle()
            raw = await self._evaluate(page, PIN_DETAILS_JS)
        finally:
            await self.session.release_page(page)

        result = normalize.build_pin_details(raw, pin_url)
        if isinstance(result, Rejected):
            logger.debug(f"No pin id in {pin_url}: {result.reason}")
            return None
        return result.record

    async def get_user_profile(self, username: str) -> UserProfile:
        """Fetch profile header fields and all boards of ``username``.

        Always returns a profile; fields missing from the page are empty.
        """
        url = PROFILE_URL.format(username=username)
        page = await self.session.new_page()
        try:
            await self._navigate(page, url)
            await self._settle()
            await self._paginate(page)
            raw = await self._evaluate(page, USER_PROFILE_JS)
        finally:
            await self.session.release_page(page)

        profile = normalize.build_user_profile(raw, username)
        logger.info(f"Profile {username} has {len(profile.boards)} boards")
        return profile
