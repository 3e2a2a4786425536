"""
Shopify Product API client: catalog lookups, bundle listing and price updates
"""

from typing import Any, Dict, List, Optional

from bundle_builder.core.logging import get_logger
from .base_client import BaseShopifyAPIClient

logger = get_logger(__name__)

PRODUCT_NODES_QUERY = """
query getProductDetails($ids: [ID!]!) {
    nodes(ids: $ids) {
        ... on Product {
            id
            title
            options {
                id
                name
                values
            }
            variants(first: 1) {
                edges {
                    node {
                        id
                    }
                }
            }
        }
    }
}
"""

FIRST_VARIANT_QUERY = """
query getFirstVariant($id: ID!) {
    product(id: $id) {
        id
        variants(first: 1) {
            edges {
                node {
                    id
                    price
                }
            }
        }
    }
}
"""

VARIANT_PRICE_UPDATE_MUTATION = """
mutation updateBundlePrice($productId: ID!, $variants: [ProductVariantsBulkInput!]!) {
    productVariantsBulkUpdate(productId: $productId, variants: $variants) {
        productVariants {
            id
            price
        }
        userErrors {
            field
            message
        }
    }
}
"""

PRODUCTS_QUERY = """
query listProducts($first: Int!, $after: String, $query: String) {
    products(first: $first, after: $after, query: $query) {
        pageInfo {
            hasNextPage
            endCursor
        }
        nodes {
            id
            title
            handle
            status
            tags
            featuredImage {
                url
                altText
            }
            variants(first: 1) {
                nodes {
                    id
                    price
                }
            }
        }
    }
}
"""


class ProductAPIClient(BaseShopifyAPIClient):
    """Shopify product queries and mutations used by the bundle workflow"""

    async def get_product_nodes(
        self, product_gids: List[str]
    ) -> List[Optional[Dict[str, Any]]]:
        """Fetch product details for every GID in one nodes() call"""
        result = await self.execute_query(PRODUCT_NODES_QUERY, {"ids": product_gids})
        nodes = result.get("nodes")
        if nodes is None:
            return []
        return nodes

    async def get_first_variant(self, product_gid: str) -> Optional[Dict[str, Any]]:
        result = await self.execute_query(FIRST_VARIANT_QUERY, {"id": product_gid})
        product = result.get("product") or {}
        edges = (product.get("variants") or {}).get("edges") or []
        if not edges:
            return None
        return edges[0].get("node")

    async def update_variant_price(
        self, product_gid: str, variant_gid: str, price: str
    ) -> Dict[str, Any]:
        result = await self.execute_query(
            VARIANT_PRICE_UPDATE_MUTATION,
            {
                "productId": product_gid,
                "variants": [{"id": variant_gid, "price": price}],
            },
        )
        return result.get("productVariantsBulkUpdate") or {}

    async def list_products(
        self, query: str, first: int, after: Optional[str] = None
    ) -> Dict[str, Any]:
        result = await self.execute_query(
            PRODUCTS_QUERY, {"first": first, "after": after, "query": query}
        )
        products = result.get("products") or {}
        page_info = products.get("pageInfo") or {}
        return {
            "nodes": products.get("nodes") or [],
            "page_info": {
                "has_next_page": bool(page_info.get("hasNextPage")),
                "end_cursor": page_info.get("endCursor"),
            },
        }
