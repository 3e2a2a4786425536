"""
Resolve selected product ids into the product data a bundle needs
"""

from typing import List, Sequence

from bundle_builder.core.exceptions import ResolutionError, ShopifyAPIError, ValidationError
from bundle_builder.core.logging import get_logger
from bundle_builder.domains.shopify.interfaces import IShopifyAdminClient
from bundle_builder.domains.shopify.models import ResolvedProduct
from bundle_builder.shared.helpers import to_product_gid

logger = get_logger(__name__)


class CatalogResolver:
    """Turns product ids into ResolvedProducts, all or nothing"""

    def __init__(self, api_client: IShopifyAdminClient):
        self.api_client = api_client

    async def resolve(self, product_ids: Sequence[str]) -> List[ResolvedProduct]:
        """
        Resolve every id, preserving order.

        Raises:
            ValidationError: no ids given
            ResolutionError: any id is unknown, or Shopify could not be queried
        """
        if not product_ids:
            raise ValidationError("At least one product is required", field="selectedProducts")

        gids = [to_product_gid(product_id) for product_id in product_ids]

        try:
            nodes = await self.api_client.get_product_nodes(gids)
        except ShopifyAPIError as e:
            raise ResolutionError(
                f"Failed to fetch product details: {e.message}",
                unresolved_ids=gids,
                cause=e,
            ) from e

        unresolved = []
        resolved: List[ResolvedProduct] = []
        for index, gid in enumerate(gids):
            node = nodes[index] if index < len(nodes) else None
            # Non-product nodes come back as empty objects from the fragment
            if not node or not node.get("id"):
                unresolved.append(gid)
                continue
            resolved.append(ResolvedProduct.from_node(node))

        if unresolved:
            logger.warning(
                "Product resolution incomplete",
                shop_domain=self.api_client.shop_domain,
                requested=len(gids),
                unresolved=unresolved,
            )
            raise ResolutionError("Incomplete product data", unresolved_ids=unresolved)

        logger.info(
            "Resolved bundle products",
            shop_domain=self.api_client.shop_domain,
            count=len(resolved),
        )
        return resolved
