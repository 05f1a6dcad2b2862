"""
Enumerations for the product catalog.

This module contains the closed value sets a product is validated against:
- ProductClassification: what kind of item the product is
- ProductType: the drink family of the product
- Allergen: allergens a product may declare

Matching against these sets is case-insensitive; see `matches()`.
"""

from enum import Enum
from typing import Optional


class _CatalogEnum(str, Enum):
    """String enum with case-insensitive lookup."""

    @classmethod
    def matches(cls, value: Optional[str]) -> bool:
        return cls.lookup(value) is not None

    @classmethod
    def lookup(cls, value: Optional[str]):
        if not isinstance(value, str):
            return None
        folded = value.casefold()
        for member in cls:
            if member.value.casefold() == folded:
                return member
        return None


class ProductClassification(_CatalogEnum):
    """
    Product classification.

    Values:
        DRINK: Brewed or bottled beverages
        BAKED_GOOD: Pastries, breads and other bakery items
    """

    DRINK = "Drink"
    BAKED_GOOD = "Baked Good"


class ProductType(_CatalogEnum):
    """Product type. Input is accepted in any letter case."""

    COFFEE = "Coffee"
    TEA = "Tea"
    SODA = "Soda"


class Allergen(_CatalogEnum):
    DAIRY = "Dairy"
    SOY = "Soy"
    GLUTEN = "Gluten"
    NUTS = "Nuts"
