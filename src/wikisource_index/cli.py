"""Command-line interface for wikisource-index."""

import argparse
import json
import logging
import sys
from urllib.parse import urlsplit

from wikisource_index.cache import default_cache
from wikisource_index.clients import WikisourceApiError, WikisourceClient
from wikisource_index.index_page import DEFAULT_CACHE_LIFETIME, IndexPage

DEFAULT_USER_AGENT = "wikisource-index/0.1 (https://wikisource.org)"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def site_config(url: str, user_agent: str) -> dict:
    """Build the WikisourceClient config for the site hosting ``url``."""
    parts = urlsplit(url)
    return {
        "base_url": f"{parts.scheme or 'https'}://{parts.netloc}",
        "headers": {"User-Agent": user_agent},
    }


def _load_index_page(site: WikisourceClient, args: argparse.Namespace) -> IndexPage:
    return IndexPage.from_url(
        site, args.url, cache=default_cache, cache_lifetime=args.cache_ttl
    )


def show_pagelist(args: argparse.Namespace) -> int:
    """Execute the pagelist command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        with WikisourceClient(site_config(args.url, args.user_agent)) as site:
            index_page = _load_index_page(site, args)
            page_list = index_page.get_page_list()

        logger.info(f"Found {len(page_list)} pages in {index_page.get_title()}")
        print(json.dumps(page_list.to_dict(), indent=2, ensure_ascii=False))
        return 0

    except WikisourceApiError as e:
        logger.error(f"Failed to get page list: {e}")
        return 1


def show_page(args: argparse.Namespace) -> int:
    """Execute the page command."""
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        with WikisourceClient(site_config(args.url, args.user_agent)) as site:
            index_page = _load_index_page(site, args)
            page = index_page.get_child_page_info(args.search, key=args.key)

    except (WikisourceApiError, ValueError) as e:
        logger.error(f"Failed to get page: {e}")
        return 1

    if page is None:
        logger.error(f"No page with {args.key} {args.search!r} in {index_page.get_title()}")
        return 1

    print(json.dumps(page.to_dict(), indent=2, ensure_ascii=False))
    return 0


def show_quality(args: argparse.Namespace) -> int:
    """Execute the quality command."""
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        with WikisourceClient(site_config(args.url, args.user_agent)) as site:
            index_page = _load_index_page(site, args)
            quality = index_page.get_quality()

    except WikisourceApiError as e:
        logger.error(f"Failed to get quality: {e}")
        return 1

    if quality is None:
        logger.warning(f"No page qualities found in {index_page.get_title()}")
        print("none")
    else:
        print(quality)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="wikisource-index",
        description="Inspect Index pages and their scanned pages on Wikisource",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--cache-ttl",
        type=int,
        default=DEFAULT_CACHE_LIFETIME,
        help=f"Seconds to cache Index page HTML (default: {DEFAULT_CACHE_LIFETIME})",
    )
    parser.add_argument(
        "--user-agent",
        type=str,
        default=DEFAULT_USER_AGENT,
        help="User-Agent header sent to Wikisource",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    pagelist_parser = subparsers.add_parser(
        "pagelist",
        help="Print the pages of an Index page as JSON",
        description="List the scanned pages of an Index page with their numbers, labels, qualities and URLs.",
    )
    pagelist_parser.add_argument("url", help="URL of the Index page")
    pagelist_parser.set_defaults(func=show_pagelist)

    page_parser = subparsers.add_parser(
        "page",
        help="Print one page of an Index page as JSON",
        description="Look up a single scanned page of an Index page.",
    )
    page_parser.add_argument("url", help="URL of the Index page")
    page_parser.add_argument("search", help="Value to search for")
    page_parser.add_argument(
        "--key",
        type=str,
        default="num",
        choices=["num", "label", "url", "quality", "title"],
        help="Page field to search by (default: num)",
    )
    page_parser.set_defaults(func=show_page)

    quality_parser = subparsers.add_parser(
        "quality",
        help="Print the quality of an Index page",
        description="Print the lowest proofreading quality (1-4) of the pages of an Index page.",
    )
    quality_parser.add_argument("url", help="URL of the Index page")
    quality_parser.set_defaults(func=show_quality)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
