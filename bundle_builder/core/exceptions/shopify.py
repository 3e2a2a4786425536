"""
Shopify and bundle-workflow exceptions

Each stage of bundle creation raises its own error kind so callers can tell
a rejected request from a half-finished one.
"""

from typing import Any, Dict, List, Optional

from .base import BundleBuilderException


class ShopifyAPIError(BundleBuilderException):
    """Raised when a call to the Shopify Admin API fails at transport or GraphQL level"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[List[Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            error_code="SHOPIFY_API_ERROR",
            details={"status_code": status_code, "errors": errors or []},
            cause=cause,
        )
        self.status_code = status_code


class ResolutionError(BundleBuilderException):
    """Raised when one or more product ids cannot be resolved"""

    def __init__(
        self,
        message: str = "Incomplete product data",
        unresolved_ids: Optional[List[str]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            error_code="RESOLUTION_ERROR",
            details={"unresolved_ids": unresolved_ids or []},
            cause=cause,
        )
        self.unresolved_ids = unresolved_ids or []


class MutationError(BundleBuilderException):
    """Raised when productBundleCreate reports user errors"""

    def __init__(
        self,
        message: str,
        user_errors: Optional[List[Dict[str, Any]]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            error_code="MUTATION_ERROR",
            details={"user_errors": user_errors or []},
            cause=cause,
        )
        self.user_errors = user_errors or []


class OperationFailedError(BundleBuilderException):
    """Raised when a bundle operation reaches the FAILED state"""

    def __init__(
        self,
        message: str = "Bundle creation failed",
        operation_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        operation_details = {"operation_id": operation_id}
        if details:
            operation_details.update(details)
        super().__init__(
            message=message,
            error_code="OPERATION_FAILED",
            details=operation_details,
            cause=cause,
        )
        self.operation_id = operation_id


class OperationTimeoutError(BundleBuilderException):
    """Raised when polling gives up before the operation reaches a terminal state"""

    def __init__(
        self,
        operation_id: str,
        attempts: int,
        elapsed_seconds: float,
        last_status: Optional[str] = None,
    ):
        super().__init__(
            message=(
                f"Bundle operation {operation_id} did not finish after "
                f"{attempts} polls ({elapsed_seconds:.1f}s)"
            ),
            error_code="OPERATION_TIMED_OUT",
            details={
                "operation_id": operation_id,
                "attempts": attempts,
                "elapsed_seconds": round(elapsed_seconds, 3),
                "last_status": last_status,
            },
        )
        self.operation_id = operation_id
        self.attempts = attempts
        self.last_status = last_status


class ReconciliationError(BundleBuilderException):
    """Raised when the bundle price cannot be applied to the created product"""

    def __init__(
        self,
        message: str,
        product_id: Optional[str] = None,
        price: Optional[str] = None,
        user_errors: Optional[List[Dict[str, Any]]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            error_code="RECONCILIATION_ERROR",
            details={
                "product_id": product_id,
                "price": price,
                "user_errors": user_errors or [],
            },
            cause=cause,
        )
        self.product_id = product_id


class ConcurrentPollError(BundleBuilderException):
    """Raised when a second poller is started for an operation already being polled"""

    def __init__(self, operation_id: str):
        super().__init__(
            message=f"Bundle operation {operation_id} is already being polled",
            error_code="CONCURRENT_POLL",
            details={"operation_id": operation_id},
        )
        self.operation_id = operation_id
