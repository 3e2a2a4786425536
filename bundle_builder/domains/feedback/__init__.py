"""
Merchant feedback domain
"""

from .repository import FeedbackRepository
from .service import FeedbackService

__all__ = ["FeedbackRepository", "FeedbackService"]
