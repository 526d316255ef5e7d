"""Browserless retrieval of pins through a general image search.

Runs a site-scoped DuckDuckGo image search and maps every hit to a LitePin.
Hits carry the source image URL (``i.pinimg.com/236x/...``), which is
upscaled like browser results. There is no browser session, no pagination and
no pin id gate.
"""

import asyncio
import logging
from typing import Any

from duckduckgo_search import DDGS
from duckduckgo_search.exceptions import DuckDuckGoSearchException
from pydantic import BaseModel

from ..config import USER_AGENT, LiteConfig
from ..errors import LiteSearchError
from ..models import LitePin
from .normalize import upscale_image_url

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept-Language": "en-US,en;q=0.9",
}


class ImageSearchResult(BaseModel):
    """One image search hit.

    Attributes:
        title: Title of the page the image was found on.
        image: Source image URL.
        url: Page the image was found on.
    """

    title: str = ""
    image: str = ""
    url: str = ""


def build_query(query: str | None, site: str = "pinterest.com") -> str:
    return f'{query}    site:"{site}"'


def parse_image_results(items: list[dict[str, Any]]) -> list[ImageSearchResult]:
    """Keep hits that have a source image, ignoring extra fields."""
    return [
        ImageSearchResult(
            title=item.get("title") or "",
            image=item.get("image") or "",
            url=item.get("url") or "",
        )
        for item in items
        if item.get("image")
    ]


def to_lite_pin(result: ImageSearchResult) -> LitePin:
    return LitePin(
        title=result.title,
        image=upscale_image_url(result.image),
        url=result.url,
    )


def _search_images(query: str, config: LiteConfig) -> list[dict[str, Any]]:
    """Blocking DuckDuckGo image search, run in a worker thread."""
    try:
        with DDGS(headers=HEADERS, timeout=config.timeout) as ddgs:
            return list(
                ddgs.images(
                    query,
                    region=config.region,
                    safesearch=config.safesearch,
                    max_results=config.max_results,
                )
            )
    except DuckDuckGoSearchException as e:
        logger.error(f"Image search failed: {e}")
        raise LiteSearchError(f"Image search failed: {e}") from e


async def retrieve_pins(query: str | None, config: LiteConfig | None = None) -> list[LitePin]:
    """Find pins for ``query`` without launching a browser.

    Args:
        query: Search terms.
        config: Lite path settings.

    Returns:
        One LitePin per image search hit, in result order.
    """
    config = config or LiteConfig()
    scoped = build_query(query, config.site)

    items = await asyncio.to_thread(_search_images, scoped, config)

    pins = [to_lite_pin(result) for result in parse_image_results(items)]
    logger.info(f"Lite search '{query}' returned {len(pins)} pins")
    return pins
