"""
Apply the bundle price to a freshly created bundle product
"""

from bundle_builder.core.exceptions import ReconciliationError, ShopifyAPIError
from bundle_builder.core.logging import get_logger
from bundle_builder.domains.shopify.interfaces import IShopifyAdminClient

logger = get_logger(__name__)


class PriceReconciler:
    """Sets the first variant price of a bundle product"""

    def __init__(self, api_client: IShopifyAdminClient):
        self.api_client = api_client

    async def reconcile(self, product_gid: str, price: str) -> str:
        """
        Set the bundle price and return the updated variant id.

        A failure here leaves the product created with Shopify's default price.

        Raises:
            ReconciliationError: the variant could not be read or updated
        """
        try:
            variant = await self.api_client.get_first_variant(product_gid)
            if not variant or not variant.get("id"):
                raise ReconciliationError(
                    "Bundle product has no variant to price",
                    product_id=product_gid,
                    price=price,
                )

            payload = await self.api_client.update_variant_price(
                product_gid, variant["id"], price
            )
        except ShopifyAPIError as e:
            raise ReconciliationError(
                f"Failed to update bundle price: {e.message}",
                product_id=product_gid,
                price=price,
                cause=e,
            ) from e

        user_errors = payload.get("userErrors") or []
        if user_errors:
            raise ReconciliationError(
                user_errors[0].get("message") or "Bundle price update was rejected",
                product_id=product_gid,
                price=price,
                user_errors=user_errors,
            )

        logger.info(
            "Bundle price applied",
            shop_domain=self.api_client.shop_domain,
            product_id=product_gid,
            variant_id=variant["id"],
            price=price,
        )
        return variant["id"]
