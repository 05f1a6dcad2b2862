"""
Constants for the Catalog Manager application.

This module defines all system-wide constants including:
- Application metadata
- Field length limits
- Validation and lookup messages
"""

# ============================================================================
# Application Metadata
# ============================================================================

APP_NAME = "Catalog Manager"
APP_VERSION = "0.1.0"
DATABASE_FILENAME = "catalog.db"
DATABASE_VERSION = "1.0"

# ============================================================================
# Field Limits
# ============================================================================

# Lengths must stay strictly below these values
MAX_PRODUCT_DESCRIPTION_LENGTH = 100
MAX_PRODUCT_NAME_LENGTH = 50

# ============================================================================
# Product Validation Messages
# ============================================================================

# Each per-field message is one "-"-prefixed segment; segments concatenate
# without a separator.
PRODUCT_DESCRIPTION_TOO_LONG = (
    f"-Description must be less than {MAX_PRODUCT_DESCRIPTION_LENGTH} characters."
)
PRODUCT_NAME_TOO_LONG = f"-Name must be less than {MAX_PRODUCT_NAME_LENGTH} characters."
PRODUCT_CLASSIFICATION_INVALID = "-Classification must be Drink or Baked Good."
PRODUCT_TYPE_INVALID = "-Type must be Coffee, Tea, or Soda."
# Wording kept as published to API clients
PRODUCT_ALLERGEN_INVALID = "-AllergenList must contain: Diary, Soy, Gluten, or Nuts."
PRODUCT_INGREDIENTS_NOT_LIST = "-IngredientsList must be a list."
PRODUCT_ALLERGEN_NOT_LIST = "-AllergenList must be a list."

PRODUCT_NAME_CONFLICT = "Product with matching name already exists."

# ============================================================================
# Lookup Messages
# ============================================================================

INGREDIENT_NOT_FOUND = "Ingredient not found."
INGREDIENT_EDIT_NOT_FOUND = "Ingredient was not found."
INGREDIENT_NAME_NOT_FOUND = "Ingredient not found"

PRODUCT_NOT_FOUND = "Product not found."
PRODUCT_NAME_NOT_FOUND = "Product not found"
PRODUCT_EDIT_NOT_FOUND = "The Product was not found"
PRODUCT_DELETE_NOT_FOUND = "A product with this ID was not found and could not be deleted."

EMPTY_NAME_QUERY = "Name value is empty"
