"""
SQLAlchemy models for Bundle Builder
"""

from .base import Base, BaseModel
from .enums import FeedbackType
from .feedback import FeedbackRecord

__all__ = [
    "Base",
    "BaseModel",
    "FeedbackType",
    "FeedbackRecord",
]
