"""
Shopify API clients package
"""

from bundle_builder.domains.shopify.interfaces import IShopifyAdminClient
from .base_client import (
    BaseShopifyAPIClient,
    RequestLimiter,
    RetryableShopifyError,
    get_request_limiter,
)
from .product_client import ProductAPIClient
from .bundle_client import BundleAPIClient


class ShopifyAdminClient(ProductAPIClient, BundleAPIClient, IShopifyAdminClient):
    """Request-scoped client with every call the bundle workflow needs"""


__all__ = [
    "BaseShopifyAPIClient",
    "RequestLimiter",
    "RetryableShopifyError",
    "get_request_limiter",
    "ProductAPIClient",
    "BundleAPIClient",
    "ShopifyAdminClient",
]
