"""
Tests for the bundle operation poller
"""

import asyncio

import pytest

from bundle_builder.core.exceptions import (
    ConcurrentPollError,
    MutationError,
    OperationFailedError,
    OperationTimeoutError,
    ShopifyAPIError,
)
from bundle_builder.domains.shopify.models import BundleComponent, OperationStatus, PollState
from bundle_builder.domains.shopify.services import OperationPoller, active_operation_count
from tests.fakes import (
    BUNDLE_PRODUCT_ID,
    OPERATION_ID,
    FakeShopifyClient,
    operation_payload,
)

COMPONENTS = [BundleComponent(product_id="gid://shopify/Product/1")]


class FakeClock:
    """Monotonic clock advanced only by the poller's sleeps"""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def make_poller(client, clock=None, **kwargs):
    clock = clock or FakeClock()
    kwargs.setdefault("interval", 1.0)
    kwargs.setdefault("max_attempts", 10)
    kwargs.setdefault("timeout", 60.0)
    return OperationPoller(client, sleep=clock.sleep, clock=clock, **kwargs)


class TestSubmit:
    async def test_returns_operation_handle(self):
        client = FakeShopifyClient()
        poller = make_poller(client)

        assert await poller.submit("Spa Day", COMPONENTS) == OPERATION_ID
        call = client.calls["create_product_bundle"][0]
        assert call["title"] == "Spa Day"
        assert call["components"][0]["productId"] == "gid://shopify/Product/1"

    async def test_user_errors_stop_before_polling(self):
        client = FakeShopifyClient(
            create_payload={
                "productBundleOperation": None,
                "userErrors": [{"field": ["input"], "message": "Title can't be blank"}],
            }
        )
        poller = make_poller(client)

        with pytest.raises(MutationError) as exc_info:
            await poller.run("", COMPONENTS)

        assert exc_info.value.message == "Title can't be blank"
        assert poller.state is PollState.ERROR
        assert "get_bundle_operation" not in client.calls

    async def test_missing_operation(self):
        client = FakeShopifyClient(create_payload={"productBundleOperation": None, "userErrors": []})

        with pytest.raises(MutationError):
            await make_poller(client).submit("Spa Day", COMPONENTS)

    async def test_transport_failure(self):
        client = FakeShopifyClient(create_payload=ShopifyAPIError("Shopify returned HTTP 400"))

        with pytest.raises(MutationError):
            await make_poller(client).submit("Spa Day", COMPONENTS)


class TestWaitForCompletion:
    async def test_polls_until_complete(self):
        client = FakeShopifyClient(
            operation_statuses=[
                operation_payload("CREATED"),
                operation_payload("ACTIVE"),
                operation_payload("COMPLETE", BUNDLE_PRODUCT_ID),
            ]
        )
        clock = FakeClock()
        poller = make_poller(client, clock)

        operation = await poller.run("Spa Day", COMPONENTS)

        assert operation.status is OperationStatus.COMPLETED
        assert operation.result_product_id == BUNDLE_PRODUCT_ID
        assert poller.state is PollState.COMPLETED
        assert poller.attempts == 3
        assert clock.sleeps == [1.0, 1.0]

    async def test_completed_spelling_is_accepted(self):
        client = FakeShopifyClient(operation_statuses=[operation_payload("COMPLETED", BUNDLE_PRODUCT_ID)])

        operation = await make_poller(client).wait_for_completion(OPERATION_ID)
        assert operation.result_product_id == BUNDLE_PRODUCT_ID

    async def test_failed_operation(self):
        client = FakeShopifyClient(
            operation_statuses=[
                operation_payload("ACTIVE"),
                operation_payload("FAILED", user_errors=[{"message": "Component is archived"}]),
            ]
        )
        poller = make_poller(client)

        with pytest.raises(OperationFailedError) as exc_info:
            await poller.wait_for_completion(OPERATION_ID)

        assert exc_info.value.message == "Component is archived"
        assert poller.state is PollState.FAILED

    async def test_complete_with_only_errors_is_failure(self):
        client = FakeShopifyClient(
            operation_statuses=[operation_payload("COMPLETE", user_errors=[{"message": "Invalid option"}])]
        )

        with pytest.raises(OperationFailedError):
            await make_poller(client).wait_for_completion(OPERATION_ID)

    async def test_complete_without_product(self):
        client = FakeShopifyClient(operation_statuses=[operation_payload("COMPLETE")])

        with pytest.raises(OperationFailedError):
            await make_poller(client).wait_for_completion(OPERATION_ID)

    async def test_operation_not_found(self):
        client = FakeShopifyClient(operation_statuses=[None])

        with pytest.raises(OperationFailedError):
            await make_poller(client).wait_for_completion(OPERATION_ID)

    async def test_status_read_failure(self):
        client = FakeShopifyClient(operation_statuses=[ShopifyAPIError("GraphQL errors: boom")])
        poller = make_poller(client)

        with pytest.raises(OperationFailedError):
            await poller.wait_for_completion(OPERATION_ID)
        assert poller.state is PollState.ERROR


class TestPollingBounds:
    async def test_stops_after_max_attempts(self):
        client = FakeShopifyClient(operation_statuses=[operation_payload("ACTIVE")])
        poller = make_poller(client, max_attempts=3)

        with pytest.raises(OperationTimeoutError) as exc_info:
            await poller.wait_for_completion(OPERATION_ID)

        assert exc_info.value.attempts == 3
        assert exc_info.value.last_status == "ACTIVE"
        assert poller.state is PollState.TIMED_OUT
        assert len(client.calls["get_bundle_operation"]) == 3

    async def test_stops_at_deadline(self):
        client = FakeShopifyClient(operation_statuses=[operation_payload("ACTIVE")])
        clock = FakeClock()
        poller = make_poller(client, clock, interval=10.0, timeout=25.0, max_attempts=100)

        with pytest.raises(OperationTimeoutError) as exc_info:
            await poller.wait_for_completion(OPERATION_ID)

        assert exc_info.value.attempts == 3
        assert clock.now <= 25.0

    async def test_slow_status_read_counts_against_deadline(self):
        class HangingClient(FakeShopifyClient):
            async def get_bundle_operation(self, operation_id):
                await asyncio.sleep(10)

        poller = OperationPoller(HangingClient(), interval=0, max_attempts=5, timeout=0.05)

        with pytest.raises(OperationTimeoutError):
            await poller.wait_for_completion(OPERATION_ID)
        assert active_operation_count() == 0


class TestCancellationAndExclusivity:
    async def test_cancel_stops_polling(self):
        client = FakeShopifyClient(operation_statuses=[operation_payload("ACTIVE")])
        poller = OperationPoller(client, interval=0.01, max_attempts=10_000, timeout=60)

        task = asyncio.create_task(poller.wait_for_completion(OPERATION_ID))
        await asyncio.sleep(0.05)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        polls = len(client.calls["get_bundle_operation"])
        await asyncio.sleep(0.05)
        assert len(client.calls["get_bundle_operation"]) == polls
        assert active_operation_count() == 0

    async def test_same_handle_cannot_be_polled_twice(self):
        client = FakeShopifyClient(operation_statuses=[operation_payload("ACTIVE")])
        first = OperationPoller(client, interval=0.01, max_attempts=10_000, timeout=60)
        second = OperationPoller(client, interval=0.01, max_attempts=10_000, timeout=60)

        task = asyncio.create_task(first.wait_for_completion(OPERATION_ID))
        await asyncio.sleep(0.02)
        try:
            with pytest.raises(ConcurrentPollError):
                await second.wait_for_completion(OPERATION_ID)
        finally:
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task


class TestExplicitBounds:
    async def test_zero_timeout_is_not_replaced_by_default(self):
        client = FakeShopifyClient(operation_statuses=[operation_payload("ACTIVE")])
        poller = make_poller(client, timeout=0)

        assert poller.timeout == 0
        with pytest.raises(OperationTimeoutError) as exc_info:
            await poller.wait_for_completion(OPERATION_ID)

        assert exc_info.value.attempts == 0
        assert "get_bundle_operation" not in client.calls

    def test_zero_attempts_rejected(self):
        with pytest.raises(ValueError):
            make_poller(FakeShopifyClient(), max_attempts=0)
