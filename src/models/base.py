"""
Base model class for all database models.

Provides common functionality and fields for all models:
- Primary key (Integer, assigned by the database on first flush)
- Timestamp fields (created_at, updated_at)
- Utility methods (to_dict, update_from_dict)
- SQLAlchemy declarative base
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.orm import declarative_base

from src.utils.datetime_utils import isoformat_utc, utc_now

# Create the declarative base for all models
Base = declarative_base()


class BaseModel(Base):
    """
    Abstract base model with common fields and methods.

    All models should inherit from this class to get:
    - id: Primary key
    - created_at: Timestamp when record was created
    - updated_at: Timestamp when record was last modified
    - to_dict(): Convert model to dictionary
    """

    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Timestamp fields
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    # Columns that update_from_dict() never touches
    PROTECTED_FIELDS = ("id", "created_at", "updated_at")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert model instance to a JSON-friendly dictionary.

        Returns:
            Dictionary representation of the model
        """
        result = {}

        for column in self.__table__.columns:
            value = getattr(self, column.key)

            # Timestamps render as ISO 8601 in UTC
            if isinstance(value, datetime):
                value = isoformat_utc(value)
            # Render decimals as fixed-point strings
            elif isinstance(value, Decimal):
                value = str(value)

            result[column.key] = value

        return result

    def update_from_dict(self, data: Dict[str, Any]) -> None:
        """
        Update model instance from dictionary.

        Only updates fields that exist in the model and are in the dictionary.
        The primary key and timestamps are never taken from the dictionary.

        Args:
            data: Dictionary with field names and values
        """
        for column in self.__table__.columns:
            if column.key in data and column.key not in self.PROTECTED_FIELDS:
                setattr(self, column.key, data[column.key])

        self.updated_at = utc_now()

    def __repr__(self) -> str:
        """
        String representation of model instance.

        Returns:
            String like "ClassName(id=1, name='...')"
        """
        class_name = self.__class__.__name__
        attrs = []

        if self.id is not None:
            attrs.append(f"id={self.id}")

        if getattr(self, "name", None) is not None:
            attrs.append(f"name='{self.name}'")

        attrs_str = ", ".join(attrs)
        return f"{class_name}({attrs_str})"
