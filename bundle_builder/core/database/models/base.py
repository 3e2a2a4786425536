"""
Base model class for SQLAlchemy models
"""

from typing import Any, Dict

from sqlalchemy.orm import declarative_base

# Create the declarative base
Base = declarative_base()


class BaseModel(Base):
    """
    Base model class with common functionality.
    """

    __abstract__ = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert model instance to dictionary"""
        return {
            column.name: getattr(self, column.name) for column in self.__table__.columns
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"
