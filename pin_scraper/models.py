"""Data models for scraped Pinterest records.

All records are immutable pydantic models. Attributes use snake_case in Python
and serialize to the camelCase shape produced by the site
(``model_dump(by_alias=True)``), so raw extraction payloads validate directly.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_RECORD_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Pin(BaseModel):
    """A single pin.

    Attributes:
        id: Numeric pin identifier taken from the ``/pin/<digits>/`` path.
        title: Pin title, empty when not rendered.
        description: Pin description, empty when not rendered.
        image_url: High-resolution image URL.
        link: External destination URL, may be empty.
        pinterest_url: Canonical pin page URL.
        board: Board name if known.
        repins: Save count if known.
    """

    model_config = _RECORD_CONFIG

    id: str = Field(min_length=1)
    title: str = ""
    description: str = ""
    image_url: str = ""
    link: str = ""
    pinterest_url: str = ""
    board: str | None = None
    repins: int | None = Field(default=None, ge=0)


class Board(BaseModel):
    """A board listed on a user profile.

    Attributes:
        id: Board slug (third segment of the board href).
        name: Display name.
        description: Board description, currently never scraped.
        pin_count: Number of pins, 0 when unparsable.
        url: Absolute board URL.
        cover_image: Cover image URL.
    """

    model_config = _RECORD_CONFIG

    id: str = ""
    name: str = ""
    description: str = ""
    pin_count: int = Field(default=0, ge=0)
    url: str = ""
    cover_image: str = ""


class UserProfile(BaseModel):
    """Profile header fields plus the user's boards in page order.

    Follower, following and monthly view counts are kept as the free text the
    site renders ("1.2k followers").
    """

    model_config = _RECORD_CONFIG

    username: str
    full_name: str = ""
    bio: str = ""
    followers: str = ""
    following: str = ""
    monthly_views: str = ""
    boards: list[Board] = Field(default_factory=list)


class LitePin(BaseModel):
    """Result of the browserless image-search path."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    image: str = ""
    url: str = ""


RecordT = TypeVar("RecordT")

MISSING_ID = "missing-id"


@dataclass(frozen=True)
class Valid(Generic[RecordT]):
    """Element that passed the identifier gate."""

    record: RecordT


@dataclass(frozen=True)
class Rejected:
    """Element dropped during normalization.

    Attributes:
        reason: Machine-readable rejection code, e.g. ``missing-id``.
        raw: The raw payload that was rejected, kept for debugging.
    """

    reason: str
    raw: dict | None = None


Extraction = Valid[RecordT] | Rejected
