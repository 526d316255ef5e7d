"""Pinterest scraper package.

Extracts pins, boards and user profiles from Pinterest by driving a headless
Chromium session, scrolling infinite feeds to load lazy content and parsing
the rendered DOM into typed records.

The package is organised as:
- services.browser_session: browser process lifecycle and page preparation
- scrapers.pinterest: navigation, pagination and extraction pipeline
- scrapers.normalize: raw payload to record conversion
- scrapers.lite: browserless image-search retrieval
"""

from .config import LiteConfig, ScraperConfig, load_config
from .errors import (
    EvaluationError,
    LaunchError,
    LiteSearchError,
    NavigationError,
    NavigationTimeoutError,
    NotInitializedError,
    PageSetupError,
    ScraperError,
)
from .models import Board, LitePin, Pin, Rejected, UserProfile, Valid
from .scrapers import PinterestScraper, retrieve_pins
from .services.browser_session import BrowserSession

__all__ = [
    "Board",
    "BrowserSession",
    "EvaluationError",
    "LaunchError",
    "LiteConfig",
    "LitePin",
    "LiteSearchError",
    "NavigationError",
    "NavigationTimeoutError",
    "NotInitializedError",
    "PageSetupError",
    "Pin",
    "PinterestScraper",
    "Rejected",
    "ScraperConfig",
    "ScraperError",
    "UserProfile",
    "Valid",
    "load_config",
    "retrieve_pins",
]
