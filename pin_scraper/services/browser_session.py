"""Browser session lifecycle for the scraper.

One BrowserSession owns one Chromium process. Each extraction operation takes
a fresh isolated page from ``new_page()`` and hands it back through
``release_page()`` when finished, on success and failure alike.

The session state (Playwright driver and browser handle) is guarded by an
asyncio lock, so ``init``/``close``/``new_page`` may be awaited from several
tasks. Each page is still driven by exactly one operation at a time.
"""

import asyncio
import logging
from typing import Any

from playwright.async_api import Browser, Page, Playwright, Route, async_playwright
from playwright.async_api import Error as PlaywrightError

from ..config import USER_AGENT, ScraperConfig
from ..errors import LaunchError, NotInitializedError, PageSetupError

logger = logging.getLogger(__name__)

LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-blink-features=AutomationControlled",
    f"--user-agent={USER_AGENT}",
]

VIEWPORT = {"width": 1280, "height": 800}

# Images stay allowed: their URLs are part of the extracted data.
BLOCKED_RESOURCE_TYPES = frozenset({"font", "stylesheet"})


async def block_heavy_resources(route: Route) -> None:
    """Abort font and stylesheet requests, let everything else through."""
    if route.request.resource_type in BLOCKED_RESOURCE_TYPES:
        await route.abort()
    else:
        await route.continue_()


async def prepare_page(page: Page) -> Page:
    """Install request filtering on a freshly opened page.

    User agent and viewport are fixed when the page is created, see
    ``BrowserSession.new_page``.
    """
    await page.route("**/*", block_heavy_resources)
    return page


class BrowserSession:
    """Headless Chromium process manager.

    Args:
        config: Scraper settings; only ``headless`` is read here.
    """

    def __init__(self, config: ScraperConfig | None = None) -> None:
        self.config = config or ScraperConfig()
        self.playwright: Playwright | None = None
        self.browser: Browser | None = None
        self._lock = asyncio.Lock()

    async def __aenter__(self) -> "BrowserSession":
        await self.init()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    @property
    def is_initialized(self) -> bool:
        return self.browser is not None

    async def init(self) -> None:
        """Launch the browser process. A second call is a no-op.

        Raises:
            LaunchError: Playwright or Chromium failed to start.
        """
        async with self._lock:
            if self.browser is not None:
                return

            try:
                self.playwright = await async_playwright().start()
                self.browser = await self.playwright.chromium.launch(
                    headless=self.config.headless,
                    args=LAUNCH_ARGS,
                )
            except Exception as e:
                logger.error(f"Failed to launch browser: {e}")
                await self._shutdown()
                raise LaunchError(f"Failed to launch browser: {e}") from e

            logger.info(f"Browser launched (headless={self.config.headless})")

    async def close(self) -> None:
        """Terminate the browser process. Safe to call repeatedly."""
        async with self._lock:
            if self.browser is None and self.playwright is None:
                return
            await self._shutdown()
            logger.info("Browser closed")

    async def _shutdown(self) -> None:
        browser, self.browser = self.browser, None
        playwright, self.playwright = self.playwright, None

        if browser is not None:
            try:
                await browser.close()
            except PlaywrightError as e:
                logger.warning(f"Error closing browser: {e}")

        if playwright is not None:
            try:
                await playwright.stop()
            except PlaywrightError as e:
                logger.warning(f"Error stopping playwright: {e}")

    async def new_page(self) -> Page:
        """Open an isolated page with the desktop identity and request filter.

        A page whose setup fails is closed before the error is raised.

        Raises:
            NotInitializedError: ``init()`` has not been awaited.
            PageSetupError: Playwright failed to open or prepare the page.
        """
        async with self._lock:
            if self.browser is None:
                raise NotInitializedError()

            # Browser.new_page creates a dedicated context closed with the page.
            try:
                page = await self.browser.new_page(user_agent=USER_AGENT, viewport=VIEWPORT)
            except PlaywrightError as e:
                logger.error(f"Failed to open page: {e}")
                raise PageSetupError(f"Failed to open page: {e}") from e

        try:
            return await prepare_page(page)
        except PlaywrightError as e:
            logger.error(f"Failed to prepare page: {e}")
            await self.release_page(page)
            raise PageSetupError(f"Failed to prepare page: {e}") from e

    async def release_page(self, page: Page) -> None:
        """Close a page obtained from ``new_page``."""
        try:
            await page.close()
        except PlaywrightError as e:
            logger.warning(f"Error closing page: {e}")
