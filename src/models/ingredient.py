"""
Ingredient model for purchasable raw ingredients.

An ingredient is a stock item the shop buys: a name, what a purchase costs,
how much a purchase contains and in which unit.

Example: "Whole Milk", 3.49 for 1.00 GAL
"""

from sqlalchemy import Column, String, Boolean, Numeric, JSON, Index

from .base import BaseModel


class Ingredient(BaseModel):
    """
    Ingredient model representing a purchasable raw ingredient.

    Attributes:
        active: Whether the ingredient is currently stocked
        name: Ingredient name (e.g., "Whole Milk")
        purchasing_cost: Cost of one purchase, rounded to 2 decimal places
        amount: Quantity contained in one purchase, rounded to 2 decimal places
        unit_of_measure: Unit of the amount, stored uppercase (e.g., "GAL", "LB")
        allergens: Ordered list of free-form allergen names
    """

    __tablename__ = "ingredients"

    active = Column(Boolean, nullable=False, default=True)
    name = Column(String(200), nullable=False)
    purchasing_cost = Column(Numeric(10, 2), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    unit_of_measure = Column(String(50), nullable=False)
    allergens = Column(JSON, nullable=True)

    __table_args__ = (Index("idx_ingredient_name", "name"),)

    def __repr__(self) -> str:
        """String representation of ingredient."""
        return (
            f"Ingredient(id={self.id}, name='{self.name}', "
            f"amount={self.amount} {self.unit_of_measure})"
        )
