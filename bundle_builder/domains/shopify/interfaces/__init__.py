"""
Shopify interfaces for Bundle Builder
"""

from .api_client import IShopifyAdminClient

__all__ = ["IShopifyAdminClient"]
