"""
Bundle models: components, asynchronous operations and creation results
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from bundle_builder.shared.constants.shopify import (
    OPERATION_STATUS_COMPLETE,
    OPERATION_STATUS_COMPLETED,
    OPERATION_STATUS_FAILED,
)


class OptionSelection(BaseModel):
    """The value chosen for one option of a component product"""

    model_config = ConfigDict(frozen=True)

    component_option_id: str
    name: str
    value: str

    def to_input(self) -> Dict[str, Any]:
        return {
            "componentOptionId": self.component_option_id,
            "name": self.name,
            "values": [self.value],
        }


class BundleComponent(BaseModel):
    """One constituent product of a bundle"""

    model_config = ConfigDict(frozen=True)

    product_id: str
    quantity: int = Field(1, ge=1)
    option_selections: List[OptionSelection] = Field(default_factory=list)

    def to_input(self) -> Dict[str, Any]:
        """Render as a ProductBundleComponentInput"""
        return {
            "quantity": self.quantity,
            "productId": self.product_id,
            "optionSelections": [s.to_input() for s in self.option_selections],
        }


class OperationStatus(str, Enum):
    """Status of a productBundleOperation as seen by the poller"""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @classmethod
    def from_shopify(cls, status: Optional[str]) -> "OperationStatus":
        status = (status or "").upper()
        if status in (OPERATION_STATUS_COMPLETE, OPERATION_STATUS_COMPLETED):
            return cls.COMPLETED
        if status == OPERATION_STATUS_FAILED:
            return cls.FAILED
        # CREATED, ACTIVE and anything unrecognised are still in flight
        return cls.PENDING


class BundleOperation(BaseModel):
    """Snapshot of an asynchronous bundle operation"""

    id: str
    status: OperationStatus = OperationStatus.PENDING
    raw_status: Optional[str] = None
    result_product_id: Optional[str] = None
    user_errors: List[Dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "BundleOperation":
        """Build from a productBundleOperation payload"""
        raw_status = payload.get("status")
        product = payload.get("product") or {}
        user_errors = payload.get("userErrors") or []
        status = OperationStatus.from_shopify(raw_status)

        # Shopify marks the job COMPLETE even when it produced only errors
        if status is OperationStatus.COMPLETED and user_errors and not product.get("id"):
            status = OperationStatus.FAILED

        return cls(
            id=payload["id"],
            status=status,
            raw_status=raw_status,
            result_product_id=product.get("id") or payload.get("productId"),
            user_errors=user_errors,
        )


class PollState(str, Enum):
    """States of the operation poller"""

    SUBMITTED = "SUBMITTED"
    POLLING = "POLLING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    TIMED_OUT = "TIMED_OUT"
    ERROR = "ERROR"


class BundleCreationStatus(str, Enum):
    """Outcome of a bundle-creation request that produced a product"""

    CREATED = "created"
    CREATED_PRICE_UNSET = "created_price_unset"


class BundleCreationResult(BaseModel):
    """
    Result of the bundle workflow.

    CREATED_PRICE_UNSET means the product exists but the price update failed;
    the product is not rolled back.
    """

    status: BundleCreationStatus
    product_gid: str
    product_id: str
    product_edit_url: str
    price: str
    reconciliation_error: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.status is BundleCreationStatus.CREATED
