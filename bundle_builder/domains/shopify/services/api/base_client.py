"""
Base Shopify Admin GraphQL client with common functionality
"""

import asyncio
from typing import Any, Dict, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from bundle_builder.core.config.settings import settings
from bundle_builder.core.exceptions import ShopifyAPIError
from bundle_builder.core.logging import get_logger
from bundle_builder.shared.helpers import normalize_shop_domain

logger = get_logger(__name__)


class RetryableShopifyError(ShopifyAPIError):
    """Throttling, 5xx and transport failures worth another attempt"""


class RequestLimiter:
    """Caps the number of Shopify calls in flight across all requests"""

    def __init__(self, max_concurrent: int):
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self.max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)

    async def __aenter__(self):
        await self._semaphore.acquire()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self._semaphore.release()


_request_limiter: Optional[RequestLimiter] = None


def get_request_limiter() -> RequestLimiter:
    """Process-wide limiter shared by every request-scoped client"""
    global _request_limiter
    if _request_limiter is None:
        _request_limiter = RequestLimiter(
            settings.shopify.SHOPIFY_MAX_CONCURRENT_REQUESTS
        )
    return _request_limiter


class BaseShopifyAPIClient:
    """
    Shopify Admin API client bound to one shop session.

    Instances are request-scoped: build one per incoming request and close it
    when the request ends.
    """

    endpoint = "/admin/api/{version}/graphql.json"

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        api_version: Optional[str] = None,
        limiter: Optional[RequestLimiter] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        max_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None,
    ):
        self.shop_domain = normalize_shop_domain(shop_domain)
        self.access_token = access_token
        self.api_version = api_version or settings.shopify.SHOPIFY_API_VERSION
        self.limiter = limiter or get_request_limiter()
        self.max_attempts = max_attempts or settings.MAX_RETRIES
        self.retry_delay = settings.RETRY_DELAY if retry_delay is None else retry_delay

        self.timeout = httpx.Timeout(settings.shopify.SHOPIFY_REQUEST_TIMEOUT, connect=10.0)
        self.http_client = http_client
        self._owns_http_client = http_client is None

    async def __aenter__(self):
        """Async context manager entry"""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()

    async def connect(self):
        """Initialize HTTP client"""
        if self.http_client is None:
            self.http_client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={
                    "Content-Type": "application/json",
                    "User-Agent": "BundleBuilder/1.0",
                },
            )
            self._owns_http_client = True

    async def close(self):
        """Close HTTP client"""
        if self.http_client and self._owns_http_client:
            await self.http_client.aclose()
        self.http_client = None

    @property
    def graphql_url(self) -> str:
        return f"https://{self.shop_domain}{self.endpoint.format(version=self.api_version)}"

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": self.access_token,
        }

    async def execute_query(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Execute a GraphQL query or mutation with bounded retries"""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.retry_delay, max=10),
            retry=retry_if_exception_type(RetryableShopifyError),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._post(query, variables or {})

    async def _post(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        await self.connect()
        payload = {"query": query, "variables": variables}

        try:
            async with self.limiter:
                response = await self.http_client.post(
                    self.graphql_url, json=payload, headers=self._get_headers()
                )
        except httpx.TransportError as e:
            logger.warning(
                "Shopify request failed", shop_domain=self.shop_domain, error=str(e)
            )
            raise RetryableShopifyError(f"Shopify request failed: {e}", cause=e)

        if response.status_code == 429 or response.status_code >= 500:
            logger.warning(
                "Shopify returned a retryable status",
                shop_domain=self.shop_domain,
                status_code=response.status_code,
            )
            raise RetryableShopifyError(
                f"Shopify returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        if response.status_code in (401, 403):
            raise ShopifyAPIError(
                "Shopify API access denied. The access token may be expired or missing scopes.",
                status_code=response.status_code,
            )

        if response.is_error:
            logger.error(
                "Shopify HTTP error",
                shop_domain=self.shop_domain,
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise ShopifyAPIError(
                f"Shopify returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                "Shopify returned a non-JSON body",
                shop_domain=self.shop_domain,
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise ShopifyAPIError(
                "Shopify returned an invalid response",
                status_code=response.status_code,
                cause=e,
            ) from e

        if not isinstance(data, dict) or not isinstance(data.get("data") or {}, dict):
            raise ShopifyAPIError(
                "Shopify returned an invalid response",
                status_code=response.status_code,
            )

        if data.get("errors"):
            messages = [error.get("message", "Unknown error") for error in data["errors"]]
            if any(
                (error.get("extensions") or {}).get("code") == "THROTTLED"
                for error in data["errors"]
            ):
                raise RetryableShopifyError(
                    "Shopify throttled the request", errors=data["errors"]
                )
            raise ShopifyAPIError(
                f"GraphQL errors: {', '.join(messages)}", errors=data["errors"]
            )

        return data.get("data") or {}
