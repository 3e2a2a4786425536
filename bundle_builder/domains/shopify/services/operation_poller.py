"""
Submit a productBundleCreate mutation and poll its operation to completion

State machine:

    SUBMITTED -> POLLING -> COMPLETED | FAILED | TIMED_OUT
    SUBMITTED -> ERROR  (user errors on the mutation)

Polling is one sequential loop per operation handle, bounded by both a poll
count and a wall-clock deadline. The wait between polls is a plain
``asyncio.sleep``, so cancelling the calling task stops the loop.
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, List, Optional, Set

from bundle_builder.core.config.settings import settings
from bundle_builder.core.exceptions import (
    ConcurrentPollError,
    MutationError,
    OperationFailedError,
    OperationTimeoutError,
    ShopifyAPIError,
)
from bundle_builder.core.logging import get_logger
from bundle_builder.domains.shopify.interfaces import IShopifyAdminClient
from bundle_builder.domains.shopify.models import (
    BundleComponent,
    BundleOperation,
    OperationStatus,
    PollState,
)

logger = get_logger(__name__)

# Operation handles with a poll loop running in this process
_active_operations: Set[str] = set()


class OperationPoller:
    """Drives one bundle operation from submission to a terminal state"""

    def __init__(
        self,
        api_client: IShopifyAdminClient,
        interval: Optional[float] = None,
        max_attempts: Optional[int] = None,
        timeout: Optional[float] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        polling = settings.polling
        self.api_client = api_client
        self.interval = polling.BUNDLE_POLL_INTERVAL_SECONDS if interval is None else interval
        self.max_attempts = (
            polling.BUNDLE_POLL_MAX_ATTEMPTS if max_attempts is None else max_attempts
        )
        self.timeout = polling.BUNDLE_POLL_TIMEOUT_SECONDS if timeout is None else timeout
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._sleep = sleep
        self._clock = clock

        self.state = PollState.SUBMITTED
        self.attempts = 0
        self.operation_id: Optional[str] = None

    def _transition(self, state: PollState, **fields) -> None:
        logger.debug(
            "Bundle operation state change",
            operation_id=self.operation_id,
            from_state=self.state.value,
            to_state=state.value,
            **fields,
        )
        self.state = state

    async def submit(self, title: str, components: List[BundleComponent]) -> str:
        """
        Run productBundleCreate and return the operation handle.

        Raises:
            MutationError: Shopify rejected the input or returned no operation
        """
        self.state = PollState.SUBMITTED
        try:
            payload = await self.api_client.create_product_bundle(
                title, [component.to_input() for component in components]
            )
        except ShopifyAPIError as e:
            self._transition(PollState.ERROR, error=e.message)
            raise MutationError(
                f"Bundle creation request failed: {e.message}", cause=e
            ) from e

        user_errors = payload.get("userErrors") or []
        if user_errors:
            self._transition(PollState.ERROR, user_errors=len(user_errors))
            logger.warning(
                "productBundleCreate returned user errors",
                shop_domain=self.api_client.shop_domain,
                user_errors=user_errors,
            )
            raise MutationError(
                user_errors[0].get("message") or "Bundle creation was rejected",
                user_errors=user_errors,
            )

        operation = payload.get("productBundleOperation") or {}
        if not operation.get("id"):
            self._transition(PollState.ERROR)
            raise MutationError("Shopify did not return a bundle operation")

        self.operation_id = operation["id"]
        logger.info(
            "Bundle operation submitted",
            shop_domain=self.api_client.shop_domain,
            operation_id=self.operation_id,
            status=operation.get("status"),
        )
        return self.operation_id

    async def wait_for_completion(self, operation_id: str) -> BundleOperation:
        """
        Poll until the operation completes.

        Raises:
            OperationFailedError: the operation failed or could not be read
            OperationTimeoutError: poll count or deadline exhausted
            ConcurrentPollError: this handle is already being polled
        """
        if operation_id in _active_operations:
            raise ConcurrentPollError(operation_id)

        _active_operations.add(operation_id)
        self.operation_id = operation_id
        try:
            return await self._poll_loop(operation_id)
        except asyncio.CancelledError:
            logger.warning(
                "Bundle operation polling cancelled",
                operation_id=operation_id,
                attempts=self.attempts,
            )
            raise
        finally:
            _active_operations.discard(operation_id)

    async def _poll_loop(self, operation_id: str) -> BundleOperation:
        self._transition(PollState.POLLING)
        self.attempts = 0
        started = self._clock()
        last_status: Optional[str] = None

        while True:
            remaining = self.timeout - (self._clock() - started)
            if remaining <= 0:
                self._timed_out(operation_id, started, last_status)

            self.attempts += 1
            try:
                payload = await asyncio.wait_for(
                    self.api_client.get_bundle_operation(operation_id), timeout=remaining
                )
            except asyncio.TimeoutError:
                self._timed_out(operation_id, started, last_status)
            except ShopifyAPIError as e:
                self._transition(PollState.ERROR, error=e.message)
                raise OperationFailedError(
                    f"Could not read bundle operation status: {e.message}",
                    operation_id=operation_id,
                    cause=e,
                ) from e

            if payload is None:
                self._transition(PollState.ERROR)
                raise OperationFailedError(
                    "Bundle operation not found", operation_id=operation_id
                )

            operation = BundleOperation.from_payload(payload)
            last_status = operation.raw_status

            if operation.status is OperationStatus.COMPLETED:
                return self._completed(operation)
            if operation.status is OperationStatus.FAILED:
                self._failed(operation)

            logger.debug(
                "Bundle operation pending",
                operation_id=operation_id,
                status=last_status,
                attempt=self.attempts,
            )

            elapsed = self._clock() - started
            if self.attempts >= self.max_attempts or elapsed + self.interval > self.timeout:
                self._timed_out(operation_id, started, last_status)

            await self._sleep(self.interval)

    def _completed(self, operation: BundleOperation) -> BundleOperation:
        if not operation.result_product_id:
            self._transition(PollState.FAILED)
            raise OperationFailedError(
                "Bundle operation completed without a product",
                operation_id=operation.id,
            )

        self._transition(PollState.COMPLETED, attempts=self.attempts)
        logger.info(
            "Bundle operation completed",
            operation_id=operation.id,
            product_id=operation.result_product_id,
            attempts=self.attempts,
        )
        return operation

    def _failed(self, operation: BundleOperation) -> None:
        self._transition(PollState.FAILED, attempts=self.attempts)
        message = "Bundle creation failed"
        if operation.user_errors:
            message = operation.user_errors[0].get("message") or message
        logger.error(
            "Bundle operation failed",
            operation_id=operation.id,
            status=operation.raw_status,
            user_errors=operation.user_errors or None,
        )
        raise OperationFailedError(
            message,
            operation_id=operation.id,
            details={"user_errors": operation.user_errors},
        )

    def _timed_out(self, operation_id: str, started: float, last_status: Optional[str]) -> None:
        elapsed = self._clock() - started
        self._transition(PollState.TIMED_OUT, attempts=self.attempts)
        logger.error(
            "Bundle operation polling timed out",
            operation_id=operation_id,
            attempts=self.attempts,
            elapsed_seconds=round(elapsed, 2),
            last_status=last_status,
        )
        raise OperationTimeoutError(
            operation_id=operation_id,
            attempts=self.attempts,
            elapsed_seconds=elapsed,
            last_status=last_status,
        )

    async def run(self, title: str, components: List[BundleComponent]) -> BundleOperation:
        """Submit the mutation and wait for its operation"""
        operation_id = await self.submit(title, components)
        return await self.wait_for_completion(operation_id)


def active_operation_count() -> int:
    """Number of operations being polled in this process"""
    return len(_active_operations)
