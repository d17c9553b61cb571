"""
Generate the Doofinder feeds from the Shopify Storefront API.

Usage:  storefront-feeds [--output-dir DIR] [--log-level LEVEL]
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from storefront_feeds.config import get_settings
from storefront_feeds.core.feed.service import run_feed_generation, FeedRunResult


FEED_ICONS = {
    'Blog': '📝',
    'Pages': '📄',
    'Exhibitors': '🎪',
    'Shows': '🎭',
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate Doofinder XML feeds from Shopify content")
    parser.add_argument("--output-dir", default=None, help="Directory for the feed files (default: FEED_OUTPUT_DIR or .)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO)")
    return parser


def print_report(result: FeedRunResult) -> None:
    """Print per-feed counts and sizes."""
    print("\n✅ Feeds generated successfully!")
    for output in result.outputs:
        print(f"\n{FEED_ICONS.get(output.name, '📦')} {output.name} Feed:")
        print(f"   File: {output.filename}")
        print(f"   Items: {output.items_count} {output.noun}")
        print(f"   Size: {output.size_mb:.2f} MB")
    print(f"\n📊 Total: {result.total_items} items")


def main(argv: Optional[List[str]] = None) -> int:
    """Run one feed generation. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
        logging.basicConfig(
            level=(args.log_level or settings.log_level).upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )

        result = asyncio.run(run_feed_generation(settings, output_dir=args.output_dir))
        print_report(result)
        return 0

    except Exception as e:
        summary = " ".join(str(e).split())
        print(f"❌ Error generating feed: {summary}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
