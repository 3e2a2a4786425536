"""
Shopify-specific constants
"""

SHOPIFY_API_VERSION = "2024-10"
SHOPIFY_ADMIN_URL = "https://admin.shopify.com"

PRODUCT_GID_PREFIX = "gid://shopify/Product/"
PRODUCT_VARIANT_GID_PREFIX = "gid://shopify/ProductVariant/"

BUNDLE_TAG = "bundle"
DEFAULT_BUNDLE_LIST_PAGE_SIZE = 50
DEFAULT_BUNDLE_LIST_MAX_PAGES = 20

# productBundleOperation statuses. Shopify reports COMPLETE; COMPLETED is
# accepted for older payloads.
OPERATION_STATUS_CREATED = "CREATED"
OPERATION_STATUS_ACTIVE = "ACTIVE"
OPERATION_STATUS_COMPLETE = "COMPLETE"
OPERATION_STATUS_COMPLETED = "COMPLETED"
OPERATION_STATUS_FAILED = "FAILED"

__all__ = [
    "SHOPIFY_API_VERSION",
    "SHOPIFY_ADMIN_URL",
    "PRODUCT_GID_PREFIX",
    "PRODUCT_VARIANT_GID_PREFIX",
    "BUNDLE_TAG",
    "DEFAULT_BUNDLE_LIST_PAGE_SIZE",
    "DEFAULT_BUNDLE_LIST_MAX_PAGES",
    "OPERATION_STATUS_CREATED",
    "OPERATION_STATUS_ACTIVE",
    "OPERATION_STATUS_COMPLETE",
    "OPERATION_STATUS_COMPLETED",
    "OPERATION_STATUS_FAILED",
]
