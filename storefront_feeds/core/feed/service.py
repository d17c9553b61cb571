"""
Feed generation service - orchestrates the entire feed generation process.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import httpx

from storefront_feeds.config import Settings, DEFAULT_SITE_URL, validate_settings
from storefront_feeds.core.security import sanitize_dict_for_logging
from storefront_feeds.core.storefront_client import StorefrontClient
from .fetcher import fetch_all_articles, fetch_all_pages, fetch_all_metaobjects, METAOBJECT_PAGE_DELAY
from .models import MetaobjectFeed
from .normalizer import normalize_metaobject
from .xml_writer import write_articles_xml, write_pages_xml, write_metaobjects_xml


logger = logging.getLogger(__name__)

BLOGS_FEED_FILENAME = 'doofinder-blogs-feed.xml'
PAGES_FEED_FILENAME = 'doofinder-pages-feed.xml'

EXHIBITORS_FEED = MetaobjectFeed(
    api_type='exhibitor',
    type='exhibitor',
    label='Exhibitors',
    path_segment='pages/exhibitor',
    filename='doofinder-exhibitors-feed.xml',
    noun='exhibitors',
)

# The store defines the show metaobject type as "shows".
SHOWS_FEED = MetaobjectFeed(
    api_type='shows',
    type='show',
    label='Shows',
    path_segment='pages/shows',
    filename='doofinder-shows-feed.xml',
    noun='shows',
)

METAOBJECT_FEEDS = (EXHIBITORS_FEED, SHOWS_FEED)


@dataclass
class FeedOutput:
    """One written feed file."""
    name: str
    filename: str
    path: Path
    items_count: int
    size_bytes: int
    noun: str

    @property
    def size_mb(self) -> float:
        return self.size_bytes / 1024 / 1024


@dataclass
class FeedRunResult:
    outputs: List[FeedOutput] = field(default_factory=list)

    @property
    def total_items(self) -> int:
        return sum(o.items_count for o in self.outputs)


def write_feed_file(output_dir: Path, filename: str, xml_string: str) -> Path:
    """Write one feed document as UTF-8 and return its path."""
    path = output_dir / filename
    with open(path, 'w', encoding='utf-8') as f:
        f.write(xml_string)
    return path


async def generate_feeds(
    client: StorefrontClient,
    output_dir: Union[str, Path] = '.',
    site_url: str = DEFAULT_SITE_URL,
    page_delay: float = METAOBJECT_PAGE_DELAY
) -> FeedRunResult:
    """
    Fetch all content and write the four feed files.

    Args:
        client: StorefrontClient instance
        output_dir: Directory to write the feeds to
        site_url: Public site base URL
        page_delay: Delay between metaobject page requests

    Returns:
        FeedRunResult describing every written file

    Raises:
        StorefrontError: On any fetch failure (nothing is retried)
        OSError: If a file cannot be written
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    logger.info("Starting feed generation...")

    tasks = [
        asyncio.ensure_future(fetch_all_articles(client)),
        asyncio.ensure_future(fetch_all_pages(client)),
        *(
            asyncio.ensure_future(fetch_all_metaobjects(client, feed.api_type, page_delay=page_delay))
            for feed in METAOBJECT_FEEDS
        ),
    ]
    try:
        articles, pages, *metaobject_lists = await asyncio.gather(*tasks)
    except Exception:
        # One failed fetch aborts the run; stop the others before the client closes.
        for task in tasks:
            task.cancel()
        raise

    logger.info("Normalizing metaobjects...")
    normalized = []
    for feed, metaobjects in zip(METAOBJECT_FEEDS, metaobject_lists):
        items = [
            normalize_metaobject(mo, feed.type, path_segment=feed.path_segment, site_url=site_url)
            for mo in metaobjects
        ]
        logger.info(f"  {feed.label}: {len(metaobjects)} fetched, {len(items)} normalized")
        normalized.append((feed, items))

    logger.info("Generating XML feeds...")
    result = FeedRunResult()

    documents = [
        ('Blog', BLOGS_FEED_FILENAME, write_articles_xml(articles, site_url=site_url), len(articles), 'articles'),
        ('Pages', PAGES_FEED_FILENAME, write_pages_xml(pages, site_url=site_url), len(pages), 'pages'),
    ]
    for feed, items in normalized:
        xml_string = write_metaobjects_xml(
            items,
            feed.type,
            label=feed.label,
            path_segment=feed.path_segment,
            site_url=site_url
        )
        documents.append((feed.label, feed.filename, xml_string, len(items), feed.noun))

    for name, filename, xml_string, count, noun in documents:
        path = write_feed_file(output_dir, filename, xml_string)
        result.outputs.append(FeedOutput(
            name=name,
            filename=filename,
            path=path,
            items_count=count,
            size_bytes=path.stat().st_size,
            noun=noun,
        ))
        logger.info(f"Created {name} feed: {path}")

    return result


async def run_feed_generation(
    settings: Settings,
    output_dir: Optional[Union[str, Path]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> FeedRunResult:
    """
    Validate settings, then generate every feed.

    Args:
        settings: Settings instance
        output_dir: Overrides settings.feed_output_dir
        transport: Optional httpx transport (used by tests)

    Raises:
        ConfigurationError: If required settings are missing (before any request)
    """
    validate_settings(settings)
    logger.debug(f"Settings: {sanitize_dict_for_logging(settings.model_dump())}")

    async with StorefrontClient(
        settings.shopify_store_domain,
        settings.storefront_access_token,
        api_version=settings.storefront_api_version,
        transport=transport
    ) as client:
        return await generate_feeds(
            client,
            output_dir=output_dir if output_dir is not None else settings.feed_output_dir,
            site_url=settings.site_url,
            page_delay=settings.metaobject_page_delay
        )
