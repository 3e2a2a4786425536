"""
Bundle creation workflow

validate -> resolve -> compose -> submit -> poll -> reconcile price

Each step starts only after the previous one returned. The Shopify client is
passed in per request; nothing here outlives the request.
"""

from decimal import Decimal, InvalidOperation
from typing import List, Optional, Sequence

from bundle_builder.core.config.settings import settings
from bundle_builder.core.exceptions import ReconciliationError, ValidationError
from bundle_builder.core.logging import get_logger
from bundle_builder.domains.shopify.interfaces import IShopifyAdminClient
from bundle_builder.domains.shopify.models import (
    BundleCreationResult,
    BundleCreationStatus,
    ProductReference,
)
from bundle_builder.shared.decorators import async_timing
from bundle_builder.shared.helpers import (
    compute_bundle_price,
    format_price,
    gid_to_numeric_id,
    shop_subdomain,
)
from .bundle_composer import compose_components
from .catalog_resolver import CatalogResolver
from .operation_poller import OperationPoller
from .price_reconciler import PriceReconciler

logger = get_logger(__name__)


def resolve_bundle_price(
    requested_price: Optional[str], products: Sequence[ProductReference]
) -> str:
    """Use the submitted price when given, else sum the component prices"""
    if requested_price is None or str(requested_price).strip() == "":
        return compute_bundle_price(product.price for product in products)

    try:
        price = Decimal(str(requested_price).strip())
    except InvalidOperation:
        raise ValidationError("Invalid price", field="price", value=requested_price)

    if not price.is_finite() or price < 0:
        raise ValidationError("Invalid price", field="price", value=requested_price)
    return format_price(price)


def build_product_edit_url(shop_domain: str, product_gid: str) -> str:
    admin_url = settings.shopify.SHOPIFY_ADMIN_URL.rstrip("/")
    return (
        f"{admin_url}/store/{shop_subdomain(shop_domain)}"
        f"/products/{gid_to_numeric_id(product_gid)}"
    )


class BundleCreationService:
    """Creates one bundle product for one shop session"""

    def __init__(
        self,
        api_client: IShopifyAdminClient,
        poller: Optional[OperationPoller] = None,
    ):
        self.api_client = api_client
        self.resolver = CatalogResolver(api_client)
        self.poller = poller or OperationPoller(api_client)
        self.reconciler = PriceReconciler(api_client)

    @staticmethod
    def validate(title: Optional[str], products: Sequence[ProductReference]) -> str:
        if not title or not title.strip():
            raise ValidationError("Title is required", field="title")
        if not products:
            raise ValidationError(
                "At least one product must be selected", field="selectedProducts"
            )
        return title.strip()

    @async_timing(threshold_ms=30000)
    async def create_bundle(
        self,
        title: Optional[str],
        selected_products: List[ProductReference],
        price: Optional[str] = None,
    ) -> BundleCreationResult:
        """
        Create a bundle product from the selected products.

        Raises:
            ValidationError, ResolutionError, MutationError,
            OperationFailedError, OperationTimeoutError

        A failed price update does not raise: the result comes back as
        CREATED_PRICE_UNSET with the error message attached.
        """
        title = self.validate(title, selected_products)
        bundle_price = resolve_bundle_price(price, selected_products)
        shop_domain = self.api_client.shop_domain

        logger.info(
            "Creating bundle",
            shop_domain=shop_domain,
            title=title,
            products=len(selected_products),
            price=bundle_price,
        )

        resolved = await self.resolver.resolve([p.id for p in selected_products])
        components = compose_components(resolved)
        operation = await self.poller.run(title, components)

        product_gid = operation.result_product_id
        result = BundleCreationResult(
            status=BundleCreationStatus.CREATED,
            product_gid=product_gid,
            product_id=gid_to_numeric_id(product_gid),
            product_edit_url=build_product_edit_url(shop_domain, product_gid),
            price=bundle_price,
        )

        try:
            await self.reconciler.reconcile(product_gid, bundle_price)
        except ReconciliationError as e:
            logger.error(
                "Bundle created but price update failed",
                shop_domain=shop_domain,
                product_id=product_gid,
                price=bundle_price,
                error=e.message,
            )
            return result.model_copy(
                update={
                    "status": BundleCreationStatus.CREATED_PRICE_UNSET,
                    "reconciliation_error": e.message,
                }
            )

        logger.info(
            "Bundle created",
            shop_domain=shop_domain,
            product_id=product_gid,
            operation_id=operation.id,
        )
        return result
