"""
Validation-related exceptions
"""

from typing import Any, Optional

from .base import BundleBuilderException


class ValidationError(BundleBuilderException):
    """Raised when request data fails validation"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details={"field": field, "value": value},
            **kwargs
        )
        self.field = field
