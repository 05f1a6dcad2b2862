"""
Product model for items sold over the counter.

A product is something on the menu: a drink or a baked good, made from a list
of ingredients, with a cost, a markup and a sale price derived from both.

Example: "House Latte", Drink / Coffee, cost "1.50", markup "2.00",
         sale price "4.50"
"""

from sqlalchemy import Column, String, Boolean, JSON, Index

from .base import BaseModel


class Product(BaseModel):
    """
    Product model representing a sellable menu item.

    Dollar fields (cost, markup, sale_price) are kept as fixed-point strings
    with exactly 2 fractional digits once formatted.

    Attributes:
        active: Whether the product is currently offered
        description: Free text, 1-99 characters
        name: Display name, 1-49 characters, unique ignoring case
        vendor_id: Supplier reference (not validated)
        image_url: Optional picture location (not validated)
        ingredients_list: Names of the ingredients the product is made from
        classification: "Drink" or "Baked Good"
        type: "Coffee", "Tea" or "Soda"
        cost: What the product costs to make
        markup: Markup ratio applied to cost (e.g. "2.00" = +200%)
        allergen_list: Declared allergens (Dairy, Soy, Gluten, Nuts)
        sale_price: cost * (1 + markup), derived, never user supplied
    """

    __tablename__ = "products"

    active = Column(Boolean, nullable=False, default=True)
    description = Column(String(100), nullable=False)
    name = Column(String(50), nullable=False)
    vendor_id = Column(String(50), nullable=True)
    image_url = Column(String(500), nullable=True)
    ingredients_list = Column(JSON, nullable=False)
    classification = Column(String(20), nullable=False)
    type = Column(String(20), nullable=False)
    cost = Column(String(20), nullable=False)
    markup = Column(String(20), nullable=False)
    allergen_list = Column(JSON, nullable=False)
    sale_price = Column(String(20), nullable=True)

    __table_args__ = (
        Index("idx_product_name", "name"),
        Index("idx_product_classification", "classification"),
    )

    def __repr__(self) -> str:
        """String representation of product."""
        return f"Product(id={self.id}, name='{self.name}', sale_price='{self.sale_price}')"
