"""
Shopify bundle API client: productBundleCreate and its asynchronous operation
"""

from typing import Any, Dict, List, Optional

from bundle_builder.core.logging import get_logger
from .base_client import BaseShopifyAPIClient

logger = get_logger(__name__)

PRODUCT_BUNDLE_CREATE_MUTATION = """
mutation productBundleCreate($input: ProductBundleCreateInput!) {
    productBundleCreate(input: $input) {
        productBundleOperation {
            id
            status
        }
        userErrors {
            field
            message
        }
    }
}
"""

PRODUCT_BUNDLE_OPERATION_QUERY = """
query productBundleOperation($id: ID!) {
    productBundleOperation(id: $id) {
        id
        status
        product {
            id
        }
        userErrors {
            field
            message
        }
    }
}
"""


class BundleAPIClient(BaseShopifyAPIClient):
    """Shopify product bundle mutations"""

    async def create_product_bundle(
        self, title: str, components: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        result = await self.execute_query(
            PRODUCT_BUNDLE_CREATE_MUTATION,
            {"input": {"title": title, "components": components}},
        )
        return result.get("productBundleCreate") or {}

    async def get_bundle_operation(self, operation_id: str) -> Optional[Dict[str, Any]]:
        result = await self.execute_query(
            PRODUCT_BUNDLE_OPERATION_QUERY, {"id": operation_id}
        )
        return result.get("productBundleOperation")
