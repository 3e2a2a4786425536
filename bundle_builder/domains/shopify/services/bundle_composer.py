"""
Build productBundleCreate components from resolved products
"""

from typing import List, Sequence

from bundle_builder.core.exceptions import ResolutionError
from bundle_builder.domains.shopify.models import (
    BundleComponent,
    OptionSelection,
    ResolvedProduct,
)


def compose_component(product: ResolvedProduct) -> BundleComponent:
    """
    One component per product, quantity 1.

    Every option is pinned to its first listed value, so variants that differ
    only in a later value cannot be bundled.
    """
    selections = []
    for option in product.options:
        if not option.values:
            raise ResolutionError(
                f"Option '{option.name}' of product '{product.title}' has no values",
                unresolved_ids=[product.id],
            )
        selections.append(
            OptionSelection(
                component_option_id=option.id,
                name=option.name,
                value=option.values[0],
            )
        )

    return BundleComponent(product_id=product.id, quantity=1, option_selections=selections)


def compose_components(products: Sequence[ResolvedProduct]) -> List[BundleComponent]:
    return [compose_component(product) for product in products]
