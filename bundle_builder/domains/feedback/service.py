"""
Feedback service
"""

from typing import Any, Optional

from bundle_builder.core.database.models import FeedbackRecord, FeedbackType
from bundle_builder.core.exceptions import ValidationError
from bundle_builder.core.logging import get_logger
from .repository import FeedbackRepository

logger = get_logger(__name__)


class FeedbackService:
    def __init__(self, repository: FeedbackRepository):
        self.repository = repository

    @staticmethod
    def parse_type(value: Optional[Any]) -> FeedbackType:
        if not isinstance(value, str) or value not in FeedbackType.values():
            raise ValidationError("Invalid feedback type", field="type", value=value)
        return FeedbackType(value)

    async def record(self, value: Optional[Any]) -> FeedbackRecord:
        """Validate and store one feedback entry"""
        feedback_type = self.parse_type(value)
        record = await self.repository.add(feedback_type.value)
        logger.info("Feedback saved", feedback_id=record.id, type=feedback_type.value)
        return record
