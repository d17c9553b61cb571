"""
Fetch content from the Storefront API for feed generation.
"""

import asyncio
import json
import logging
from typing import List, Optional, Dict, Any

from storefront_feeds.core.storefront_client import StorefrontClient, UnexpectedShapeError
from .models import Article, Page, Metaobject
from .queries import ARTICLES_QUERY, PAGES_QUERY, METAOBJECTS_QUERY


logger = logging.getLogger(__name__)

# Pause before each metaobject request, to stay under the API rate limit.
METAOBJECT_PAGE_DELAY = 0.5


async def paginate(
    client: StorefrontClient,
    query: str,
    connection: str,
    variables: Optional[Dict[str, Any]] = None,
    page_delay: float = 0.0,
    label: Optional[str] = None
) -> List[Dict[str, Any]]:
    """
    Follow a cursor-paginated connection until ``hasNextPage`` is false.

    Args:
        client: StorefrontClient instance
        query: GraphQL document taking a ``$cursor`` variable
        connection: Name of the connection under ``data`` (e.g. 'articles')
        variables: Extra query variables
        page_delay: Seconds to sleep before every request
        label: Name used in log messages

    Returns:
        All ``node`` objects, in the order received

    Raises:
        UnexpectedShapeError: If a response has no ``data.<connection>``
    """
    label = label or connection
    nodes: List[Dict[str, Any]] = []
    cursor = None
    has_next_page = True

    while has_next_page:
        if page_delay > 0:
            await asyncio.sleep(page_delay)

        response = await client.execute(query, {**(variables or {}), 'cursor': cursor})

        data = response.get('data') or {}
        page = data.get(connection)
        if not page:
            raw = json.dumps(response)
            logger.error(f"Response for {label}: {json.dumps(response, indent=2)}")
            raise UnexpectedShapeError(
                f"Shopify response missing {connection} for {label}. Response: {raw}",
                response=response
            )

        edges = page.get('edges') or []
        page_info = page.get('pageInfo') or {}

        if not edges:
            logger.info(f"  No {label} in this batch")
        else:
            logger.debug(f"  Found {len(edges)} {label} in this batch")

        nodes.extend(edge['node'] for edge in edges)
        has_next_page = bool(page_info.get('hasNextPage'))
        cursor = page_info.get('endCursor')
        if has_next_page and not cursor:
            raise UnexpectedShapeError(
                f"Shopify response for {label} reports another page but no endCursor",
                response=response
            )

        logger.info(f"Fetched {len(nodes)} {label} so far...")

    logger.info(f"Total {label} fetched: {len(nodes)}")
    return nodes


async def fetch_all_articles(client: StorefrontClient) -> List[Article]:
    """Fetch every blog article."""
    logger.info("Fetching blog articles...")
    nodes = await paginate(client, ARTICLES_QUERY, 'articles')
    return [Article.from_node(node) for node in nodes]


async def fetch_all_pages(client: StorefrontClient) -> List[Page]:
    """Fetch every CMS page."""
    logger.info("Fetching CMS pages...")
    nodes = await paginate(client, PAGES_QUERY, 'pages')
    return [Page.from_node(node) for node in nodes]


async def fetch_all_metaobjects(
    client: StorefrontClient,
    metaobject_type: str,
    page_delay: float = METAOBJECT_PAGE_DELAY
) -> List[Metaobject]:
    """
    Fetch every metaobject of one type.

    Args:
        client: StorefrontClient instance
        metaobject_type: Metaobject type as defined in the store
        page_delay: Seconds to sleep before every page request

    Returns:
        List of Metaobject objects
    """
    logger.info(f'Fetching metaobjects for type "{metaobject_type}"...')
    nodes = await paginate(
        client,
        METAOBJECTS_QUERY,
        'metaobjects',
        variables={'type': metaobject_type},
        page_delay=page_delay,
        label=f"{metaobject_type} metaobjects"
    )
    return [Metaobject.from_node(node) for node in nodes]
