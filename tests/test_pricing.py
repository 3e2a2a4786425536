"""
Tests for bundle price computation
"""

import pytest

from bundle_builder.core.exceptions import ValidationError
from bundle_builder.domains.shopify.models import ProductReference
from bundle_builder.domains.shopify.services import resolve_bundle_price
from bundle_builder.shared.helpers import compute_bundle_price, parse_price


class TestComputeBundlePrice:
    def test_sums_with_two_decimal_places(self):
        assert compute_bundle_price(["10.00", "5.5"]) == "15.50"

    def test_invalid_entries_count_as_zero(self):
        assert compute_bundle_price(["10.00", "5.5", "abc"]) == "15.50"
        assert compute_bundle_price([None, "", "NaN", "Infinity"]) == "0.00"

    def test_empty_list(self):
        assert compute_bundle_price([]) == "0.00"

    def test_no_float_drift(self):
        assert compute_bundle_price(["0.1", "0.2"]) == "0.30"

    def test_rounds_half_up(self):
        assert compute_bundle_price(["1.005"]) == "1.01"

    def test_parse_price_accepts_numbers(self):
        assert parse_price(3) == 3
        assert parse_price(True) == 0


class TestResolveBundlePrice:
    @pytest.fixture
    def products(self):
        return [
            ProductReference(id="1", price="10.00"),
            ProductReference(id="2", price="5.5"),
        ]

    def test_computed_when_not_supplied(self, products):
        assert resolve_bundle_price(None, products) == "15.50"
        assert resolve_bundle_price("  ", products) == "15.50"

    def test_supplied_price_wins(self, products):
        assert resolve_bundle_price("12", products) == "12.00"

    @pytest.mark.parametrize("price", ["abc", "-1", "NaN"])
    def test_invalid_supplied_price(self, products, price):
        with pytest.raises(ValidationError) as exc_info:
            resolve_bundle_price(price, products)
        assert exc_info.value.details["field"] == "price"
