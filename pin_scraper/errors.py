"""Exceptions raised by the scraper core.

Playwright errors are translated into these types at the browser boundary so
callers never need to import Playwright to handle failures. The original
exception is always chained as ``__cause__``.
"""


class ScraperError(Exception):
    """Base exception for all scraper failures."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.message = message
        self.url = url


class LaunchError(ScraperError):
    """Browser process could not be started."""


class NotInitializedError(ScraperError):
    """Session used before ``init()`` was awaited."""

    def __init__(self, message: str = "Browser not initialized. Call init() first."):
        super().__init__(message)


class NavigationError(ScraperError):
    """Page navigation failed."""


class NavigationTimeoutError(NavigationError):
    """Navigation did not settle within the configured timeout."""


class EvaluationError(ScraperError):
    """In-page extraction script raised."""


class LiteSearchError(ScraperError):
    """Image search request for the lite retrieval path failed."""


class PageSetupError(ScraperError):
    """A new page could not be opened or prepared."""
