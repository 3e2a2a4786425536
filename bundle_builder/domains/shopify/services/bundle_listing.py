"""
List bundle products, most expensive first
"""

from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from bundle_builder.core.config.settings import settings
from bundle_builder.core.logging import get_logger
from bundle_builder.domains.shopify.interfaces import IShopifyAdminClient
from bundle_builder.shared.helpers import parse_price

logger = get_logger(__name__)

T = TypeVar("T")


def first_variant_price(product: Dict[str, Any]) -> Decimal:
    """Price of the first variant; missing or malformed prices count as 0"""
    variants = product.get("variants") or []
    if isinstance(variants, dict):
        variants = variants.get("nodes") or []
    if not variants:
        return Decimal(0)
    return parse_price((variants[0] or {}).get("price"))


def merge_sort(items: Sequence[T], key: Callable[[T], Any], descending: bool = False) -> List[T]:
    """
    Stable top-down merge sort.

    On equal keys the element from the left half is emitted first, so items
    with equal keys keep their input order.
    """
    if len(items) <= 1:
        return list(items)

    middle = len(items) // 2
    left = merge_sort(items[:middle], key, descending)
    right = merge_sort(items[middle:], key, descending)
    return _merge(left, right, key, descending)


def _merge(left: List[T], right: List[T], key, descending: bool) -> List[T]:
    result: List[T] = []
    i = j = 0
    while i < len(left) and j < len(right):
        left_key, right_key = key(left[i]), key(right[j])
        take_left = left_key >= right_key if descending else left_key <= right_key
        if take_left:
            result.append(left[i])
            i += 1
        else:
            result.append(right[j])
            j += 1

    result.extend(left[i:])
    result.extend(right[j:])
    return result


def sort_bundles_by_price(bundles: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return merge_sort(bundles, key=first_variant_price, descending=True)


def has_tag(product: Dict[str, Any], tag: str) -> bool:
    tags = product.get("tags") or []
    if isinstance(tags, str):
        tags = tags.split(",")
    wanted = tag.strip().lower()
    return any(str(t).strip().lower() == wanted for t in tags)


def to_bundle_payload(node: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a products() node into the shape the admin UI renders"""
    variants = node.get("variants") or {}
    if isinstance(variants, dict):
        variants = variants.get("nodes") or []
    image = node.get("featuredImage") or None
    return {
        "id": node.get("id"),
        "title": node.get("title"),
        "handle": node.get("handle"),
        "status": node.get("status"),
        "tags": node.get("tags") or [],
        "image": {"src": image.get("url"), "alt": image.get("altText")} if image else None,
        "variants": [
            {"id": variant.get("id"), "price": variant.get("price")}
            for variant in variants
        ],
    }


class BundleListingService:
    """Reads the shop's bundle products"""

    def __init__(
        self,
        api_client: IShopifyAdminClient,
        tag: Optional[str] = None,
        page_size: Optional[int] = None,
        max_pages: Optional[int] = None,
    ):
        self.api_client = api_client
        self.tag = tag or settings.shopify.BUNDLE_TAG
        self.page_size = page_size or settings.shopify.BUNDLE_LIST_PAGE_SIZE
        self.max_pages = max_pages or settings.shopify.BUNDLE_LIST_MAX_PAGES

    async def fetch_bundles(self) -> List[Dict[str, Any]]:
        """Every product carrying the bundle tag, in Shopify's order"""
        bundles: List[Dict[str, Any]] = []
        cursor = None

        for _ in range(self.max_pages):
            result = await self.api_client.list_products(
                query=f"tag:{self.tag}", first=self.page_size, after=cursor
            )
            bundles.extend(
                to_bundle_payload(node)
                for node in result.get("nodes") or []
                if has_tag(node, self.tag)
            )

            page_info = result.get("page_info") or {}
            cursor = page_info.get("end_cursor")
            if not page_info.get("has_next_page") or not cursor:
                break
        else:
            logger.warning(
                "Bundle listing truncated",
                shop_domain=self.api_client.shop_domain,
                max_pages=self.max_pages,
            )

        return bundles

    async def list_bundles(self) -> List[Dict[str, Any]]:
        """Bundle products sorted by first-variant price, highest first"""
        bundles = await self.fetch_bundles()
        logger.info(
            "Fetched bundles",
            shop_domain=self.api_client.shop_domain,
            count=len(bundles),
        )
        return sort_bundles_by_price(bundles)
