"""Pinterest scrapers.

- pinterest: browser-driven extraction pipeline (search, boards, pins, profiles)
- pagination: scroll-and-wait driver for lazy-loaded feeds
- normalize: conversion of raw in-page payloads into typed records
- lite: browserless image-search retrieval
"""

from .lite import retrieve_pins
from .pagination import scroll
from .pinterest import PinterestScraper

__all__ = [
    "PinterestScraper",
    "retrieve_pins",
    "scroll",
]
