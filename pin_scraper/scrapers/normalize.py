"""Normalization of raw in-page extraction payloads into typed records.

The in-page scripts return only primitive attribute and text values. Every
field is lenient: a missing element yields an empty string or zero. The single
strict rule is the identifier gate, which rejects pins without a numeric id.
"""

import re
from typing import Any

from ..config import SITE_ORIGIN
from ..models import MISSING_ID, Board, Extraction, Pin, Rejected, UserProfile, Valid

PIN_ID_RE = re.compile(r"/pin/(\d+)")
NON_DIGIT_RE = re.compile(r"\D")

LOW_RES_TOKEN = "236x"
HIGH_RES_TOKEN = "1200x"


def clean_text(value: str | None) -> str:
    """Trim surrounding whitespace, mapping missing text to ''."""
    return value.strip() if value else ""


def parse_count(text: str | None) -> int:
    """Parse a human-readable count by dropping every non-digit character.

    Abbreviations are not expanded: "1.2K saves" parses to 12.
    Returns 0 when no digits remain.
    """
    digits = NON_DIGIT_RE.sub("", text or "")
    return int(digits) if digits else 0


def upscale_image_url(url: str | None) -> str:
    """Swap the 236px thumbnail size token for the 1200px variant."""
    return (url or "").replace(LOW_RES_TOKEN, HIGH_RES_TOKEN)


def extract_pin_id(href: str | None) -> str:
    """Return the digits of the first ``/pin/<digits>`` segment, or ''."""
    match = PIN_ID_RE.search(href or "")
    return match.group(1) if match else ""


def absolute_url(href: str | None) -> str:
    """Join a site-relative href with the site origin."""
    return f"{SITE_ORIGIN}{href or ''}"


def board_id_from_href(href: str | None) -> str:
    """Board slug is the third '/'-separated segment: '/user/slug/' -> 'slug'."""
    if href is None:
        return ""
    parts = href.split("/")
    return parts[2] if len(parts) > 2 else ""


def pick_image_src(raw: dict[str, Any]) -> str:
    """Prefer ``src``, falling back to ``data-src`` only when src is absent."""
    src = raw.get("src")
    if src is None:
        src = raw.get("dataSrc")
    return src or ""


def build_search_result(raw: dict[str, Any]) -> Extraction[str]:
    """Normalize one search card into its high-resolution image URL."""
    if not extract_pin_id(raw.get("href")):
        return Rejected(MISSING_ID, raw)
    return Valid(upscale_image_url(pick_image_src(raw)))


def build_board_pin(raw: dict[str, Any]) -> Extraction[Pin]:
    """Normalize one board card.

    Description and external link are not rendered on board grids and stay
    empty.
    """
    href = raw.get("href") or ""
    pin_id = extract_pin_id(href)
    if not pin_id:
        return Rejected(MISSING_ID, raw)

    return Valid(
        Pin(
            id=pin_id,
            title=clean_text(raw.get("title")),
            image_url=upscale_image_url(raw.get("src")),
            pinterest_url=absolute_url(href),
        )
    )


def build_pin_details(raw: dict[str, Any], pin_url: str) -> Extraction[Pin]:
    """Normalize a pin closeup page. The id comes from the requested URL."""
    pin_id = extract_pin_id(pin_url)
    if not pin_id:
        return Rejected(MISSING_ID, raw)

    return Valid(
        Pin(
            id=pin_id,
            title=clean_text(raw.get("title")),
            description=clean_text(raw.get("description")),
            image_url=upscale_image_url(raw.get("src")),
            link=raw.get("link") or "",
            pinterest_url=pin_url,
            repins=parse_count(raw.get("repins")),
        )
    )


def build_board(raw: dict[str, Any]) -> Board:
    href = raw.get("href")
    return Board(
        id=board_id_from_href(href),
        name=clean_text(raw.get("name")),
        pin_count=parse_count(raw.get("pinCount")),
        url=absolute_url(href),
        cover_image=raw.get("src") or "",
    )


def build_user_profile(raw: dict[str, Any], username: str) -> UserProfile:
    """Normalize a profile page. Profiles have no identifier gate."""
    return UserProfile(
        username=username,
        full_name=clean_text(raw.get("fullName")),
        bio=clean_text(raw.get("bio")),
        followers=clean_text(raw.get("followers")),
        following=clean_text(raw.get("following")),
        monthly_views=clean_text(raw.get("monthlyViews")),
        boards=[build_board(board) for board in raw.get("boards") or []],
    )


def accepted(results: list[Extraction[Any]]) -> list[Any]:
    """Records from Valid results, in input order."""
    return [result.record for result in results if isinstance(result, Valid)]


def rejected(results: list[Extraction[Any]]) -> list[Rejected]:
    return [result for result in results if isinstance(result, Rejected)]
