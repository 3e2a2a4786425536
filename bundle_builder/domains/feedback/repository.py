"""
Feedback persistence
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bundle_builder.core.database.models import FeedbackRecord
from bundle_builder.core.exceptions import DatabaseQueryError


class FeedbackRepository:
    """Append-only access to the feedback table"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, feedback_type: str) -> FeedbackRecord:
        """Stage one row; the session owner commits"""
        record = FeedbackRecord(type=feedback_type)
        try:
            self.session.add(record)
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseQueryError(
                "Failed to save feedback", query="INSERT feedback", cause=e
            ) from e
        return record

    async def count(self, feedback_type: Optional[str] = None) -> int:
        stmt = select(func.count()).select_from(FeedbackRecord)
        if feedback_type:
            stmt = stmt.where(FeedbackRecord.type == feedback_type)
        result = await self.session.execute(stmt)
        return result.scalar_one()
