"""
Database models package.

This package contains all SQLAlchemy ORM models for the application.
"""

from .base import Base, BaseModel
from .ingredient import Ingredient
from .product import Product
from .enums import Allergen, ProductClassification, ProductType

__all__ = [
    "Base",
    "BaseModel",
    # Core Models
    "Ingredient",
    "Product",
    # Enums
    "Allergen",
    "ProductClassification",
    "ProductType",
]
