"""
Feedback model for SQLAlchemy

Append-only thumbs-up / thumbs-down records.
"""

from sqlalchemy import Column, DateTime, Integer, String, func

from .base import BaseModel


class FeedbackRecord(BaseModel):
    """A single feedback submission"""

    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(16), nullable=False)  # FeedbackType value
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.current_timestamp(),
    )

    def __repr__(self) -> str:
        return f"<FeedbackRecord(id={self.id}, type={self.type})>"
