"""
Shopify identifier and domain helpers
"""

from bundle_builder.shared.constants.shopify import PRODUCT_GID_PREFIX


def to_product_gid(product_id: str) -> str:
    """Accept a numeric id or a product GID and return the GID"""
    product_id = str(product_id).strip()
    if product_id.startswith("gid://"):
        return product_id
    return f"{PRODUCT_GID_PREFIX}{product_id}"


def gid_to_numeric_id(gid: str) -> str:
    """gid://shopify/Product/123 -> 123"""
    return str(gid).rstrip("/").split("/")[-1]


def normalize_shop_domain(shop_domain: str) -> str:
    """Strip scheme and trailing slash from a shop domain"""
    return (
        shop_domain.strip()
        .replace("https://", "")
        .replace("http://", "")
        .rstrip("/")
    )


def shop_subdomain(shop_domain: str) -> str:
    """my-store.myshopify.com -> my-store"""
    return normalize_shop_domain(shop_domain).split(".")[0]
