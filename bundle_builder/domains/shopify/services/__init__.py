"""
Shopify services for Bundle Builder
"""

from .api import ShopifyAdminClient, RequestLimiter, get_request_limiter
from .catalog_resolver import CatalogResolver
from .bundle_composer import compose_component, compose_components
from .operation_poller import OperationPoller, active_operation_count
from .price_reconciler import PriceReconciler
from .bundle_listing import BundleListingService, merge_sort, sort_bundles_by_price
from .bundle_creation_service import BundleCreationService, resolve_bundle_price

__all__ = [
    "ShopifyAdminClient",
    "RequestLimiter",
    "get_request_limiter",
    "CatalogResolver",
    "compose_component",
    "compose_components",
    "OperationPoller",
    "active_operation_count",
    "PriceReconciler",
    "BundleListingService",
    "merge_sort",
    "sort_bundles_by_price",
    "BundleCreationService",
    "resolve_bundle_price",
]
