"""
Tests for the end-to-end bundle creation workflow
"""

import json

import httpx
import pytest

from bundle_builder.core.exceptions import (
    OperationFailedError,
    ResolutionError,
    ValidationError,
)
from bundle_builder.domains.shopify.models import BundleCreationStatus, ProductReference
from bundle_builder.domains.shopify.services import (
    BundleCreationService,
    OperationPoller,
    RequestLimiter,
    ShopifyAdminClient,
)
from tests.fakes import (
    BUNDLE_PRODUCT_ID,
    BUNDLE_VARIANT_ID,
    OPERATION_ID,
    operation_payload,
    product_node,
)


async def no_sleep(seconds):
    return None


@pytest.fixture
def references(selected_products):
    return [ProductReference(**product) for product in selected_products]


def make_service(client):
    poller = OperationPoller(client, interval=0, max_attempts=5, timeout=10, sleep=no_sleep)
    return BundleCreationService(client, poller=poller)


class TestBundleCreationService:
    async def test_creates_bundle_and_sets_computed_price(self, fake_client, references):
        result = await make_service(fake_client).create_bundle("  Spa Day ", references)

        assert result.status is BundleCreationStatus.CREATED
        assert result.is_complete
        assert result.product_gid == BUNDLE_PRODUCT_ID
        assert result.product_id == "9001"
        assert result.product_edit_url == (
            "https://admin.shopify.com/store/test-shop/products/9001"
        )
        assert result.price == "15.50"

        mutation = fake_client.calls["create_product_bundle"][0]
        assert mutation["title"] == "Spa Day"
        assert [c["productId"] for c in mutation["components"]] == [
            "gid://shopify/Product/101",
            "gid://shopify/Product/102",
        ]
        assert fake_client.calls["update_variant_price"][0]["price"] == "15.50"

    async def test_requested_price_is_applied(self, fake_client, references):
        result = await make_service(fake_client).create_bundle("Spa Day", references, "12.5")

        assert result.price == "12.50"
        assert fake_client.calls["update_variant_price"][0]["price"] == "12.50"

    async def test_steps_run_in_order(self, fake_client, references):
        await make_service(fake_client).create_bundle("Spa Day", references)

        assert list(fake_client.calls) == [
            "get_product_nodes",
            "create_product_bundle",
            "get_bundle_operation",
            "get_first_variant",
            "update_variant_price",
        ]

    @pytest.mark.parametrize("title", [None, "", "   "])
    async def test_title_required(self, fake_client, references, title):
        with pytest.raises(ValidationError):
            await make_service(fake_client).create_bundle(title, references)
        assert not fake_client.calls

    async def test_products_required(self, fake_client):
        with pytest.raises(ValidationError):
            await make_service(fake_client).create_bundle("Spa Day", [])
        assert not fake_client.calls

    async def test_unresolved_product_means_no_mutation(self, fake_client, references):
        references.append(ProductReference(id="404"))

        with pytest.raises(ResolutionError):
            await make_service(fake_client).create_bundle("Spa Day", references)

        assert "create_product_bundle" not in fake_client.calls

    async def test_failed_operation_skips_price_update(self, fake_client, references):
        fake_client.operation_statuses = [operation_payload("FAILED")]

        with pytest.raises(OperationFailedError):
            await make_service(fake_client).create_bundle("Spa Day", references)

        assert "update_variant_price" not in fake_client.calls

    async def test_price_failure_returns_partial_result(self, fake_client, references):
        fake_client.update_payload = {
            "productVariants": [],
            "userErrors": [{"message": "Price is invalid"}],
        }

        result = await make_service(fake_client).create_bundle("Spa Day", references)

        assert result.status is BundleCreationStatus.CREATED_PRICE_UNSET
        assert not result.is_complete
        assert result.product_gid == BUNDLE_PRODUCT_ID
        assert result.reconciliation_error == "Price is invalid"


class TestCreationOverHttp:
    """Workflow against a real client with Shopify answered by httpx.MockTransport"""

    @staticmethod
    def shopify_handler(price_update_response):
        def handler(request):
            query = json.loads(request.content)["query"]
            if "productVariantsBulkUpdate" in query:
                return price_update_response
            if "productBundleCreate(" in query:
                data = {
                    "productBundleCreate": {
                        "productBundleOperation": {"id": OPERATION_ID, "status": "CREATED"},
                        "userErrors": [],
                    }
                }
            elif "productBundleOperation(id:" in query:
                data = {"productBundleOperation": operation_payload("COMPLETE", BUNDLE_PRODUCT_ID)}
            elif "nodes(ids:" in query:
                data = {"nodes": [product_node("101"), product_node("102")]}
            else:
                data = {
                    "product": {
                        "id": BUNDLE_PRODUCT_ID,
                        "variants": {"edges": [{"node": {"id": BUNDLE_VARIANT_ID, "price": "0.00"}}]},
                    }
                }
            return httpx.Response(200, json={"data": data})

        return handler

    def make_client(self, price_update_response):
        return ShopifyAdminClient(
            "test-shop.myshopify.com",
            "shpat_test",
            limiter=RequestLimiter(2),
            http_client=httpx.AsyncClient(
                transport=httpx.MockTransport(self.shopify_handler(price_update_response))
            ),
            retry_delay=0,
        )

    async def test_garbled_price_update_still_reports_product(self, references):
        client = self.make_client(httpx.Response(200, text="<html>upstream hiccup</html>"))

        result = await make_service(client).create_bundle("Spa Day", references)

        assert result.status is BundleCreationStatus.CREATED_PRICE_UNSET
        assert result.product_id == "9001"
        assert result.reconciliation_error.startswith("Failed to update bundle price")

    async def test_successful_price_update(self, references):
        client = self.make_client(
            httpx.Response(
                200,
                json={
                    "data": {
                        "productVariantsBulkUpdate": {
                            "productVariants": [{"id": BUNDLE_VARIANT_ID, "price": "15.50"}],
                            "userErrors": [],
                        }
                    }
                },
            )
        )

        result = await make_service(client).create_bundle("Spa Day", references)

        assert result.status is BundleCreationStatus.CREATED
