"""
Tests for listing and ordering bundle products
"""

from bundle_builder.domains.shopify.services import (
    BundleListingService,
    merge_sort,
    sort_bundles_by_price,
)
from bundle_builder.domains.shopify.services.bundle_listing import (
    first_variant_price,
    has_tag,
    to_bundle_payload,
)
from tests.fakes import FakeShopifyClient, bundle_node


def priced(name, price):
    return {"name": name, "variants": [{"price": price}] if price is not None else []}


class TestMergeSort:
    def test_descending_keeps_ties_in_input_order(self):
        bundles = [priced("a", "10"), priced("b", "30"), priced("c", "10")]

        assert [b["name"] for b in sort_bundles_by_price(bundles)] == ["b", "a", "c"]

    def test_many_ties_stay_stable(self):
        items = [(i % 3, i) for i in range(20)]

        result = merge_sort(items, key=lambda item: item[0], descending=True)

        assert result == sorted(items, key=lambda item: -item[0])

    def test_ascending(self):
        assert merge_sort([3, 1, 2], key=lambda x: x) == [1, 2, 3]

    def test_does_not_mutate_input(self):
        items = [2, 1]
        merge_sort(items, key=lambda x: x)
        assert items == [2, 1]

    def test_missing_or_bad_price_sorts_as_zero(self):
        bundles = [priced("none", None), priced("bad", "n/a"), priced("one", "1.00")]

        assert [b["name"] for b in sort_bundles_by_price(bundles)] == ["one", "none", "bad"]
        assert first_variant_price({"variants": {"nodes": []}}) == 0


class TestBundlePayload:
    def test_flattens_variant_nodes(self):
        node = bundle_node("5", "19.99")
        node["featuredImage"] = {"url": "https://cdn/5.png", "altText": "Five"}

        payload = to_bundle_payload(node)

        assert payload["variants"] == [{"id": "gid://shopify/ProductVariant/50", "price": "19.99"}]
        assert payload["image"] == {"src": "https://cdn/5.png", "alt": "Five"}

    def test_tag_match_is_case_insensitive(self):
        assert has_tag({"tags": ["Summer", "Bundle"]}, "bundle")
        assert has_tag({"tags": "sale, bundle"}, "bundle")
        assert not has_tag({"tags": ["bundles"]}, "bundle")


class TestBundleListingService:
    async def test_follows_pages_and_sorts(self):
        client = FakeShopifyClient(
            product_pages=[
                [bundle_node("1", "10.00"), bundle_node("2", "30.00")],
                [bundle_node("3", "10.00"), bundle_node("4", "99.00", tags=["featured"])],
            ]
        )

        bundles = await BundleListingService(client, page_size=2).list_bundles()

        assert [b["id"] for b in bundles] == [
            "gid://shopify/Product/2",
            "gid://shopify/Product/1",
            "gid://shopify/Product/3",
        ]
        assert [call["after"] for call in client.calls["list_products"]] == [None, "1"]
        assert client.calls["list_products"][0]["query"] == "tag:bundle"

    async def test_stops_at_max_pages(self):
        client = FakeShopifyClient(product_pages=[[bundle_node(str(i), "1.00")] for i in range(5)])

        bundles = await BundleListingService(client, max_pages=2).fetch_bundles()

        assert len(bundles) == 2
        assert len(client.calls["list_products"]) == 2

    async def test_no_bundles(self):
        assert await BundleListingService(FakeShopifyClient()).list_bundles() == []
