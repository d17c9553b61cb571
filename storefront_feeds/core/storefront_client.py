"""
Shopify Storefront GraphQL API client.
"""

import logging
from typing import Optional, Dict, List, Any

import httpx

from storefront_feeds.config import DEFAULT_API_VERSION
from storefront_feeds.core.security import sanitize_dict_for_logging, sanitize_string_for_logging


logger = logging.getLogger(__name__)

ACCESS_TOKEN_HEADER = "X-Shopify-Storefront-Access-Token"


class StorefrontError(Exception):
    """Base exception for Storefront API errors."""
    pass


class TransportError(StorefrontError):
    """The endpoint answered with a non-success HTTP status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ApiError(StorefrontError):
    """The response carried a GraphQL ``errors`` list."""

    def __init__(self, message: str, messages: Optional[List[str]] = None):
        super().__init__(message)
        self.messages = messages or []


class UnexpectedShapeError(StorefrontError):
    """The response is missing a field the caller needs."""

    def __init__(self, message: str, response: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.response = response


class StorefrontClient:
    """
    Async Storefront GraphQL client.

    No retries are performed: a failed request raises immediately.
    """

    def __init__(
        self,
        store_domain: str,
        access_token: str,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize Storefront client.

        Args:
            store_domain: API host (e.g., latitudes-online.myshopify.com)
            access_token: Storefront access token
            api_version: Storefront API version segment
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.store_domain = store_domain.strip().rstrip('/')
        self.access_token = access_token
        self.api_version = api_version
        self.timeout = timeout

        self.client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            transport=transport
        )

    @property
    def endpoint(self) -> str:
        """GraphQL endpoint URL."""
        return f"https://{self.store_domain}/api/{self.api_version}/graphql.json"

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            ACCESS_TOKEN_HEADER: self.access_token,
        }

    async def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Run a GraphQL query.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            Decoded JSON response (with ``data`` key)

        Raises:
            TransportError: If the endpoint returns a non-success status
            ApiError: If the response contains GraphQL errors
        """
        headers = self._headers()
        logger.debug(
            "POST %s variables=%s headers=%s",
            self.endpoint,
            variables,
            sanitize_dict_for_logging(headers)
        )

        response = await self.client.post(
            self.endpoint,
            json={"query": query, "variables": variables or {}},
            headers=headers
        )

        if not response.is_success:
            body = sanitize_string_for_logging(response.text[:200], self.access_token)
            logger.error(f"Storefront API returned HTTP {response.status_code}: {body}")
            raise TransportError(
                f"Shopify API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code
            )

        data = response.json()

        errors = data.get("errors") if isinstance(data, dict) else None
        if errors:
            messages = [
                str(error.get("message", error)) if isinstance(error, dict) else str(error)
                for error in errors
            ]
            raise ApiError(f"GraphQL errors: {'; '.join(messages)}", messages=messages)

        return data

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
