"""
Shopify Admin API client interface for Bundle Builder

The bundle workflow only talks to Shopify through this interface, so tests can
drive it with deterministic doubles.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class IShopifyAdminClient(ABC):
    """Interface for the Shopify calls made by the bundle workflow"""

    shop_domain: str

    @abstractmethod
    async def get_product_nodes(self, product_gids: List[str]) -> List[Optional[Dict[str, Any]]]:
        """
        Fetch product nodes by GID

        Returns:
            One entry per requested GID, in order; None for unknown ids
        """

    @abstractmethod
    async def create_product_bundle(
        self, title: str, components: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Run productBundleCreate

        Returns:
            The productBundleCreate payload ({productBundleOperation, userErrors})
        """

    @abstractmethod
    async def get_bundle_operation(self, operation_id: str) -> Optional[Dict[str, Any]]:
        """Fetch the current state of a productBundleOperation"""

    @abstractmethod
    async def get_first_variant(self, product_gid: str) -> Optional[Dict[str, Any]]:
        """Fetch the first variant ({id, price}) of a product"""

    @abstractmethod
    async def update_variant_price(
        self, product_gid: str, variant_gid: str, price: str
    ) -> Dict[str, Any]:
        """
        Run productVariantsBulkUpdate for a single variant price

        Returns:
            The mutation payload ({productVariants, userErrors})
        """

    @abstractmethod
    async def list_products(
        self, query: str, first: int, after: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Fetch one page of products matching a search query

        Returns:
            {"nodes": [...], "page_info": {"has_next_page", "end_cursor"}}
        """
