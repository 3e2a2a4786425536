"""
Helpers module for Bundle Builder
"""

from .price_utils import parse_price, format_price, compute_bundle_price
from .string_utils import (
    to_product_gid,
    gid_to_numeric_id,
    shop_subdomain,
    normalize_shop_domain,
)

__all__ = [
    "parse_price",
    "format_price",
    "compute_bundle_price",
    "to_product_gid",
    "gid_to_numeric_id",
    "shop_subdomain",
    "normalize_shop_domain",
]
