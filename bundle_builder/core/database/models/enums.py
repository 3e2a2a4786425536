"""
Enums shared by the database models
"""

import enum


class FeedbackType(str, enum.Enum):
    """Merchant feedback on the app"""

    GOOD = "good"
    BAD = "bad"

    @classmethod
    def values(cls):
        return [member.value for member in cls]
