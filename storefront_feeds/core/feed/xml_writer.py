"""
XML writer for the Doofinder RSS feeds.

Documents are RSS 2.0 with the Google Base namespace (``g:``) carrying the
extra id/type/image fields. Optional elements are left out entirely when the
source has no value.
"""

import logging
import re
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import List, Optional, Sequence

from storefront_feeds.config import DEFAULT_SITE_URL
from .models import Article, Page, NormalizedItem
from .sanitizer import clean_content, escape_xml


logger = logging.getLogger(__name__)

# Google Shopping namespace
G_NS = 'http://base.google.com/ns/1.0'

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

FRACTION_RE = re.compile(r'\.(\d+)')


def format_rfc1123(timestamp: str) -> str:
    """
    Format an ISO-8601 timestamp as an HTTP date, e.g. 'Mon, 01 Jan 2024 10:00:00 GMT'.

    Raises:
        ValueError: If the timestamp cannot be parsed
    """
    value = timestamp.strip()
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    # fromisoformat before 3.11 only takes 3 or 6 fraction digits
    value = FRACTION_RE.sub(lambda m: '.' + m.group(1)[:6].ljust(6, '0'), value)
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return format_datetime(dt.astimezone(timezone.utc), usegmt=True)


def _open_document(title: str, link: str, description: str) -> List[str]:
    return [
        XML_DECLARATION,
        f'<rss version="2.0" xmlns:g="{G_NS}">\n',
        '  <channel>\n',
        f'    <title>{escape_xml(title)}</title>\n',
        f'    <link>{escape_xml(link)}</link>\n',
        f'    <description>{escape_xml(description)}</description>\n\n',
    ]


def _close_document(parts: List[str]) -> str:
    parts.append('  </channel>\n')
    parts.append('</rss>')
    return ''.join(parts)


def _item_lines(
    item_id: str,
    title: str,
    link: str,
    description: str,
    item_type: str,
    image_link: Optional[str] = None,
    pub_date: Optional[str] = None,
    author: Optional[str] = None,
    categories: Sequence[str] = ()
) -> List[str]:
    lines = [
        '    <item>\n',
        f'      <g:id>{escape_xml(item_id)}</g:id>\n',
        f'      <title>{escape_xml(title)}</title>\n',
        f'      <link>{escape_xml(link)}</link>\n',
        f'      <description>{escape_xml(clean_content(description))}</description>\n',
        f'      <g:type>{escape_xml(item_type)}</g:type>\n',
    ]

    if image_link:
        lines.append(f'      <g:image_link>{escape_xml(image_link)}</g:image_link>\n')

    if pub_date:
        lines.append(f'      <pubDate>{format_rfc1123(pub_date)}</pubDate>\n')

    if author:
        lines.append(f'      <author>{escape_xml(author)}</author>\n')

    for category in categories:
        lines.append(f'      <category>{escape_xml(category)}</category>\n')

    lines.append('    </item>\n\n')
    return lines


def write_articles_xml(articles: Sequence[Article], site_url: str = DEFAULT_SITE_URL) -> str:
    """
    Generate the blog feed.

    Args:
        articles: Articles to include
        site_url: Public site base URL

    Returns:
        XML string
    """
    site_url = site_url.rstrip('/')
    parts = _open_document(
        'Latitudes Online Blog Feed',
        f'{site_url}/blogs',
        'Blog articles for Doofinder'
    )

    for article in articles:
        parts.extend(_item_lines(
            item_id=f'blog_{article.handle}',
            title=article.title,
            link=f'{site_url}/blogs/{article.blog_handle}/{article.handle}',
            description=article.excerpt or article.content_html,
            item_type='blog_article',
            image_link=article.image.url if article.image else None,
            pub_date=article.published_at,
            author=article.author_name,
            categories=article.tags,
        ))

    logger.debug(f"Built blog feed with {len(articles)} items")
    return _close_document(parts)


def write_pages_xml(pages: Sequence[Page], site_url: str = DEFAULT_SITE_URL) -> str:
    """Generate the CMS pages feed."""
    site_url = site_url.rstrip('/')
    parts = _open_document(
        'Latitudes Online Pages Feed',
        f'{site_url}/pages',
        'CMS pages for Doofinder'
    )

    for page in pages:
        parts.extend(_item_lines(
            item_id=f'page_{page.handle}',
            title=page.title,
            link=f'{site_url}/pages/{page.handle}',
            description=page.body_summary or page.body,
            item_type='cms_page',
            pub_date=page.updated_at,
        ))

    logger.debug(f"Built pages feed with {len(pages)} items")
    return _close_document(parts)


def write_metaobjects_xml(
    items: Sequence[NormalizedItem],
    metaobject_type: str,
    label: Optional[str] = None,
    path_segment: Optional[str] = None,
    site_url: str = DEFAULT_SITE_URL
) -> str:
    """
    Generate a feed of normalized metaobjects.

    Args:
        items: Normalized items
        metaobject_type: Value for g:type
        label: Human-readable feed name (defaults to the type)
        path_segment: Channel link path (defaults to the lowercased label)
        site_url: Public site base URL

    Returns:
        XML string
    """
    site_url = site_url.rstrip('/')
    label_text = label or metaobject_type
    link_segment = path_segment or label_text.lower()

    parts = _open_document(
        f'Latitudes Online {label_text} Feed',
        f'{site_url}/{link_segment}',
        f'{label_text} metaobjects for Doofinder'
    )

    for item in items:
        parts.extend(_item_lines(
            item_id=item.id,
            title=item.title,
            link=item.link,
            description=item.description,
            item_type=metaobject_type,
            image_link=item.image_url,
            pub_date=item.updated_at,
        ))

    logger.debug(f"Built {label_text} feed with {len(items)} items")
    return _close_document(parts)
