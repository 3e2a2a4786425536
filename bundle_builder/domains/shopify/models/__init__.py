"""
Shopify data models for Bundle Builder
"""

from .product import ProductReference, ProductOption, ResolvedProduct
from .bundle import (
    OptionSelection,
    BundleComponent,
    OperationStatus,
    BundleOperation,
    PollState,
    BundleCreationStatus,
    BundleCreationResult,
)

__all__ = [
    "ProductReference",
    "ProductOption",
    "ResolvedProduct",
    "OptionSelection",
    "BundleComponent",
    "OperationStatus",
    "BundleOperation",
    "PollState",
    "BundleCreationStatus",
    "BundleCreationResult",
]
