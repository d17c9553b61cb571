"""
Feed generation core module.
"""

from .models import Article, Page, Metaobject, MetaobjectField, NormalizedItem
from .fetcher import fetch_all_articles, fetch_all_pages, fetch_all_metaobjects
from .normalizer import normalize_metaobject
from .sanitizer import clean_content, escape_xml
from .xml_writer import write_articles_xml, write_pages_xml, write_metaobjects_xml
from .service import generate_feeds, run_feed_generation

__all__ = [
    'Article',
    'Page',
    'Metaobject',
    'MetaobjectField',
    'NormalizedItem',
    'fetch_all_articles',
    'fetch_all_pages',
    'fetch_all_metaobjects',
    'normalize_metaobject',
    'clean_content',
    'escape_xml',
    'write_articles_xml',
    'write_pages_xml',
    'write_metaobjects_xml',
    'generate_feeds',
    'run_feed_generation'
]
