"""Command-line entry point.

Runs one scraper operation and prints the result as JSON. Configures logging
and makes sure the browser is closed however the operation ends.

Example:
    pin-scraper search "ads illustration poster" --scroll-count 1 --delay-ms 2000
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from .config import ScraperConfig, load_config
from .errors import ScraperError
from .scrapers.lite import retrieve_pins
from .scrapers.pinterest import PinterestScraper

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pin-scraper", description="Scrape pins, boards and profiles from Pinterest."
    )
    parser.add_argument("--config", help="YAML file with scraper settings")
    parser.add_argument("--scroll-count", type=int, help="pagination cycles (default 3)")
    parser.add_argument("--delay-ms", type=int, help="pause between scrolls in ms (default 2000)")
    parser.add_argument(
        "--headed", action="store_true", help="show the browser window instead of running headless"
    )
    parser.add_argument("--log-level", help="logging level, e.g. DEBUG")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("search", help="search pins by keyword").add_argument("query")
    commands.add_parser("board", help="list pins of a board").add_argument("url")
    commands.add_parser("pin", help="details of a single pin").add_argument("url")
    commands.add_parser("profile", help="user profile and boards").add_argument("username")
    commands.add_parser("lite", help="search through image search, no browser").add_argument(
        "query"
    )
    return parser


def _to_json(result: Any) -> Any:
    if isinstance(result, list):
        return [_to_json(item) for item in result]
    if hasattr(result, "model_dump"):
        return result.model_dump(by_alias=True, exclude_none=True)
    return result


async def run(args: argparse.Namespace, config: ScraperConfig) -> Any:
    """Execute the selected sub-command and return its raw result."""
    if args.command == "lite":
        return await retrieve_pins(args.query)

    async with PinterestScraper(config) as scraper:
        if args.command == "search":
            return await scraper.search_pins(args.query)
        if args.command == "board":
            return await scraper.get_board_pins(args.url)
        if args.command == "pin":
            return await scraper.get_pin_details(args.url)
        return await scraper.get_user_profile(args.username)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # pydantic's ValidationError is a ValueError, as are malformed config files.
    try:
        config = load_config(
            args.config,
            scroll_count=args.scroll_count,
            delay_ms=args.delay_ms,
            headless=False if args.headed else None,
            log_level=args.log_level,
        )
    except ValueError as e:
        parser.error(f"invalid configuration: {e}")

    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(message)s",
        level=config.log_level,
    )

    try:
        result = asyncio.run(run(args, config))
    except ScraperError as e:
        logger.error(f"Scraping failed: {e}")
        return 1

    print(json.dumps(_to_json(result), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
