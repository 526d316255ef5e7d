"""Tests for raw payload normalization.

Covers count parsing, image URL upscaling, pin id extraction and the
identifier gate applied to search, board and pin detail payloads.
"""

import pytest

from pin_scraper.models import MISSING_ID, Pin, Rejected, Valid
from pin_scraper.scrapers import normalize


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1.2K saves", 12),
        ("345", 345),
        ("1,024 pins", 1024),
        ("no saves yet", 0),
        ("", 0),
        (None, 0),
    ],
)
def test_parse_count_strips_non_digits(text, expected):
    """Counts keep only digits; abbreviations are not expanded."""
    assert normalize.parse_count(text) == expected


def test_upscale_image_url_rewrites_size_token():
    url = "https://i.pinimg.com/236x/ab/cd/ef.jpg"
    assert normalize.upscale_image_url(url) == "https://i.pinimg.com/1200x/ab/cd/ef.jpg"


def test_upscale_image_url_leaves_high_res_untouched():
    """A URL without the 236x token comes back unchanged."""
    url = "https://i.pinimg.com/originals/ab/cd/ef.jpg"
    assert normalize.upscale_image_url(url) == url
    assert normalize.upscale_image_url(normalize.upscale_image_url(url)) == url


def test_upscale_image_url_missing():
    assert normalize.upscale_image_url(None) == ""


@pytest.mark.parametrize(
    "href, expected",
    [
        ("/pin/123456/", "123456"),
        ("https://www.pinterest.com/pin/987/?source=feed", "987"),
        ("/pin/abc/", ""),
        ("/user/board/", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_extract_pin_id(href, expected):
    assert normalize.extract_pin_id(href) == expected


@pytest.mark.parametrize(
    "href, expected",
    [
        ("/someuser/travel-ideas/", "travel-ideas"),
        ("/someuser", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_board_id_from_href(href, expected):
    assert normalize.board_id_from_href(href) == expected


def test_clean_text():
    assert normalize.clean_text("  Summer poster \n") == "Summer poster"
    assert normalize.clean_text(None) == ""


def test_pick_image_src_prefers_src_over_data_src():
    assert normalize.pick_image_src({"src": "a.jpg", "dataSrc": "b.jpg"}) == "a.jpg"
    assert normalize.pick_image_src({"src": None, "dataSrc": "b.jpg"}) == "b.jpg"
    assert normalize.pick_image_src({"src": "", "dataSrc": "b.jpg"}) == ""
    assert normalize.pick_image_src({}) == ""


def test_build_search_result_rejects_cards_without_pin_id():
    result = normalize.build_search_result({"href": "/ideas/x/", "src": "a.jpg"})

    assert isinstance(result, Rejected)
    assert result.reason == MISSING_ID
    assert result.raw == {"href": "/ideas/x/", "src": "a.jpg"}


def test_build_search_result_returns_high_res_url():
    result = normalize.build_search_result(
        {"href": "/pin/42/", "src": "https://i.pinimg.com/236x/a.jpg"}
    )

    assert result == Valid("https://i.pinimg.com/1200x/a.jpg")


def test_build_board_pin():
    """Board pins carry id, title, image and canonical URL only."""
    result = normalize.build_board_pin(
        {
            "href": "/pin/555/",
            "src": "https://i.pinimg.com/236x/z.jpg",
            "title": "  Retro ad  ",
        }
    )

    assert isinstance(result, Valid)
    pin = result.record
    assert pin.id == "555"
    assert pin.title == "Retro ad"
    assert pin.image_url == "https://i.pinimg.com/1200x/z.jpg"
    assert pin.pinterest_url == "https://www.pinterest.com/pin/555/"
    assert pin.description == ""
    assert pin.link == ""
    assert pin.repins is None


def test_build_board_pin_rejects_missing_id():
    result = normalize.build_board_pin({"href": None, "src": "z.jpg", "title": "x"})
    assert isinstance(result, Rejected)


def test_build_pin_details():
    raw = {
        "src": "https://i.pinimg.com/236x/p.jpg",
        "title": " Poster ",
        "description": " Bold colours ",
        "link": "https://example.com/shop",
        "repins": "1.2K saves",
    }

    result = normalize.build_pin_details(raw, "https://www.pinterest.com/pin/777/")

    assert result == Valid(
        Pin(
            id="777",
            title="Poster",
            description="Bold colours",
            image_url="https://i.pinimg.com/1200x/p.jpg",
            link="https://example.com/shop",
            pinterest_url="https://www.pinterest.com/pin/777/",
            repins=12,
        )
    )


def test_build_pin_details_defaults_missing_fields():
    raw = {"src": None, "title": None, "description": None, "link": None, "repins": None}

    pin = normalize.build_pin_details(raw, "https://www.pinterest.com/pin/8/").record

    assert pin.title == ""
    assert pin.image_url == ""
    assert pin.link == ""
    assert pin.repins == 0


def test_build_pin_details_rejects_url_without_id():
    result = normalize.build_pin_details({}, "https://www.pinterest.com/someuser/")
    assert result == Rejected(MISSING_ID, {})


def test_build_user_profile():
    raw = {
        "fullName": " Jane Doe ",
        "bio": "Illustrator",
        "followers": "1.5k followers",
        "following": "20 following",
        "monthlyViews": "10k+ monthly views",
        "boards": [
            {
                "href": "/janedoe/posters/",
                "name": " Posters ",
                "pinCount": "1,204 Pins",
                "src": "https://i.pinimg.com/236x/cover.jpg",
            },
            {"href": None, "name": None, "pinCount": None, "src": None},
        ],
    }

    profile = normalize.build_user_profile(raw, "janedoe")

    assert profile.username == "janedoe"
    assert profile.full_name == "Jane Doe"
    assert profile.followers == "1.5k followers"
    assert profile.monthly_views == "10k+ monthly views"
    assert [board.id for board in profile.boards] == ["posters", ""]
    first, second = profile.boards
    assert first.name == "Posters"
    assert first.pin_count == 1204
    assert first.url == "https://www.pinterest.com/janedoe/posters/"
    assert first.cover_image == "https://i.pinimg.com/236x/cover.jpg"
    assert second.url == "https://www.pinterest.com"
    assert second.pin_count == 0


def test_build_user_profile_empty_page():
    profile = normalize.build_user_profile({}, "ghost")

    assert profile.username == "ghost"
    assert profile.full_name == ""
    assert profile.boards == []


def test_accepted_and_rejected_split():
    results = [Valid("a"), Rejected(MISSING_ID), Valid("b")]

    assert normalize.accepted(results) == ["a", "b"]
    assert normalize.rejected(results) == [Rejected(MISSING_ID)]
