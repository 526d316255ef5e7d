"""Configuration management for the scraper.

Settings come from keyword arguments, ``PIN_SCRAPER_*`` environment variables,
an optional YAML file and finally the documented defaults, in that order of
precedence. Configuration objects are frozen once built.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

SITE_ORIGIN = "https://www.pinterest.com"

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class ScraperConfig(BaseSettings):
    """Browser scraping settings, fixed for the lifetime of a session.

    Attributes:
        headless: Run Chromium without a visible window.
        scroll_count: Number of scroll-and-wait pagination cycles.
        delay_ms: Pause after each scroll in milliseconds.
        navigation_timeout_ms: Ceiling for a single navigation.
        settle_delay_ms: Fixed wait on single-item pages (pin, profile).
        log_level: Logging level used by the command-line entry point.
    """

    model_config = SettingsConfigDict(env_prefix="PIN_SCRAPER_", frozen=True, extra="ignore")

    headless: bool = True
    scroll_count: int = Field(default=3, ge=0)
    delay_ms: int = Field(default=2000, ge=0)
    navigation_timeout_ms: int = Field(default=30000, ge=0)
    settle_delay_ms: int = Field(default=2000, ge=0)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level


class LiteConfig(BaseSettings):
    """Settings for the browserless image-search path.

    Attributes:
        timeout: Search request timeout in seconds.
        site: Domain the search is scoped to.
        region: Search region code.
        safesearch: 'on', 'moderate' or 'off'.
        max_results: Upper bound on returned hits.
    """

    model_config = SettingsConfigDict(env_prefix="PIN_SCRAPER_LITE_", frozen=True, extra="ignore")

    timeout: int = Field(default=10, gt=0)
    site: str = "pinterest.com"
    region: str = "wt-wt"
    safesearch: str = "moderate"
    max_results: int = Field(default=100, gt=0)


def _read_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML mapping, returning an empty dict for missing files."""
    if not path.exists():
        logger.debug(f"Config file {path} not found, using defaults")
        return {}

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def load_config(path: str | Path | None = None, **overrides: Any) -> ScraperConfig:
    """Build a ScraperConfig from an optional YAML file plus overrides.

    Keyword overrides are merged shallowly over the file contents; ``None``
    overrides are ignored so unset CLI flags keep the file or default value.

    Args:
        path: YAML file with top-level scraper keys, optional.
        **overrides: Field values taking precedence over the file.

    Returns:
        Frozen ScraperConfig.
    """
    values: dict[str, Any] = {}
    if path is not None:
        values.update(_read_yaml(Path(path)))
    values.update({key: value for key, value in overrides.items() if value is not None})
    return ScraperConfig(**values)
