from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from storefront_feeds.core.storefront_client import StorefrontClient


STORE_DOMAIN = "test-store.myshopify.com"
ACCESS_TOKEN = "shpat_test_token_123"

ENV_VARS = (
    "SHOPIFY_STORE_DOMAIN",
    "STOREFRONT_ACCESS_TOKEN",
    "STOREFRONT_API_VERSION",
    "SITE_URL",
    "METAOBJECT_PAGE_DELAY",
    "FEED_OUTPUT_DIR",
    "LOG_LEVEL",
)


def connection(nodes: List[Dict[str, Any]], has_next_page: bool = False, end_cursor: Optional[str] = None) -> Dict[str, Any]:
    return {
        "pageInfo": {"hasNextPage": has_next_page, "endCursor": end_cursor},
        "edges": [{"node": node} for node in nodes],
    }


def paged(name: str, pages: List[List[Dict[str, Any]]]) -> Dict[Optional[str], Dict[str, Any]]:
    """Map request cursor -> response body for a multi-page connection."""
    responses = {}
    cursor = None
    for i, nodes in enumerate(pages):
        last = i == len(pages) - 1
        next_cursor = None if last else f"{name}-cursor-{i + 1}"
        responses[cursor] = {"data": {name: connection(nodes, not last, next_cursor)}}
        cursor = next_cursor
    return responses


class GraphQLRouter:
    """Fake Storefront endpoint keyed by operation name, metaobject type and cursor."""

    def __init__(self):
        self.routes: Dict[tuple, Dict[str, Any]] = {}
        self.requests: List[Dict[str, Any]] = []
        self.headers: List[httpx.Headers] = []

    def add(self, operation: str, responses: Dict[Optional[str], Dict[str, Any]], metaobject_type: Optional[str] = None):
        for cursor, body in responses.items():
            self.routes[(operation, metaobject_type, cursor)] = body

    def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.requests.append(payload)
        self.headers.append(request.headers)
        query = payload["query"]
        variables = payload.get("variables") or {}
        operation = next(op for op in ("GetArticles", "GetPages", "GetMetaobjects") if op in query)
        key = (operation, variables.get("type"), variables.get("cursor"))
        if key not in self.routes:
            return httpx.Response(404, json={"error": f"no route for {key}"})
        return httpx.Response(200, json=self.routes[key])

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def router() -> GraphQLRouter:
    return GraphQLRouter()


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], StorefrontClient]:
    def _make(handler):
        return StorefrontClient(STORE_DOMAIN, ACCESS_TOKEN, transport=httpx.MockTransport(handler))
    return _make


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No feed settings in the environment and no .env file in the working directory."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def article_node(handle: str, **overrides) -> Dict[str, Any]:
    node = {
        "id": f"gid://shopify/Article/{handle}",
        "title": f"Article {handle}",
        "handle": handle,
        "content": "plain",
        "contentHtml": "<p>plain</p>",
        "excerpt": None,
        "publishedAt": "2024-01-01T10:00:00Z",
        "image": None,
        "blog": {"handle": "news"},
        "author": {"name": "Ana"},
        "tags": [],
    }
    node.update(overrides)
    return node


def page_node(handle: str, **overrides) -> Dict[str, Any]:
    node = {
        "id": f"gid://shopify/Page/{handle}",
        "title": f"Page {handle}",
        "handle": handle,
        "body": "<p>Body</p>",
        "bodySummary": "Summary",
        "createdAt": "2023-12-01T09:00:00Z",
        "updatedAt": "2024-02-03T04:05:06Z",
    }
    node.update(overrides)
    return node


def metaobject_node(handle: str, mo_type: str, fields: List[Dict[str, Any]], updated_at: Optional[str] = "2024-03-01T00:00:00Z") -> Dict[str, Any]:
    return {
        "id": f"gid://shopify/Metaobject/{handle}",
        "handle": handle,
        "type": mo_type,
        "updatedAt": updated_at,
        "fields": fields,
    }
