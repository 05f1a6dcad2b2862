"""
Input validation functions for the Catalog Manager application.

This module provides validation for catalog payloads:
- Ingredient validation (returns a list of error strings)
- Product validation (returns one concatenated error string)
- Product name uniqueness against a candidate set
- Derived sale price calculation and product formatting

Validators are pure: they never touch the database and never mutate their
input. A record may be a plain dict (request payload) or a model instance.
"""

from decimal import ROUND_HALF_UP
from typing import Any, Iterable, List, Mapping, Optional

from src.models.enums import Allergen, ProductClassification, ProductType
from src.services.formatters import (
    TWO_PLACES,
    amount_context,
    format_dollar_value,
    is_number,
    parse_decimal,
)

from .constants import (
    MAX_PRODUCT_DESCRIPTION_LENGTH,
    MAX_PRODUCT_NAME_LENGTH,
    PRODUCT_DESCRIPTION_TOO_LONG,
    PRODUCT_NAME_TOO_LONG,
    PRODUCT_CLASSIFICATION_INVALID,
    PRODUCT_TYPE_INVALID,
    PRODUCT_ALLERGEN_INVALID,
    PRODUCT_ALLERGEN_NOT_LIST,
    PRODUCT_INGREDIENTS_NOT_LIST,
    PRODUCT_NAME_CONFLICT,
)


def _field(record: Any, key: str) -> Any:
    """Read a field from a dict payload or a model instance."""
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def _is_blank(value: Any) -> bool:
    return isinstance(value, str) and value.strip() == ""


def _collect(messages: Iterable[Optional[str]]) -> List[str]:
    """Keep the non-empty messages, in order."""
    return [message for message in messages if message]


# ============================================================================
# Shared field checks
# ============================================================================


def check_required_string(value: Any, label: str) -> str:
    """Return "<label> is null." / "<label> is empty." / "<label> must be text."
    or "" when present."""
    if value is None:
        return f"{label} is null."
    if not isinstance(value, str):
        return f"{label} must be text."
    if _is_blank(value):
        return f"{label} is empty."
    return ""


def check_required_number(value: Any, label: str, allow_negative: bool = False) -> str:
    """Return the first problem with a required numeric value, or ""."""
    if value is None:
        return f"{label} is null."
    if _is_blank(value):
        return f"{label} is empty."
    if not is_number(value):
        return f"{label} must be a number."
    if not allow_negative and parse_decimal(value) < 0:
        return f"{label} must not be negative."
    return ""


# ============================================================================
# Ingredient validation
# ============================================================================


def validate_ingredient(ingredient: Any) -> List[str]:
    """
    Validate an ingredient record.

    Every check runs; errors accumulate rather than short-circuit.

    Args:
        ingredient: Ingredient payload or model instance

    Returns:
        List of error messages (empty list = valid)
    """
    return _collect(
        [
            check_required_string(_field(ingredient, "name"), "Name"),
            check_required_string(_field(ingredient, "unit_of_measure"), "Unit of measure"),
            check_required_number(_field(ingredient, "purchasing_cost"), "Purchasing cost"),
            check_required_number(_field(ingredient, "amount"), "Amount"),
        ]
    )


# ============================================================================
# Product validation (one function per field)
# ============================================================================


def validate_product_description(product: Any) -> str:
    description = _field(product, "description")
    error = check_required_string(description, "Description")
    if error:
        return f"-{error}"
    if len(str(description)) >= MAX_PRODUCT_DESCRIPTION_LENGTH:
        return PRODUCT_DESCRIPTION_TOO_LONG
    return ""


def validate_product_name(product: Any) -> str:
    name = _field(product, "name")
    error = check_required_string(name, "Name")
    if error:
        return f"-{error}"
    if len(str(name)) >= MAX_PRODUCT_NAME_LENGTH:
        return PRODUCT_NAME_TOO_LONG
    return ""


def validate_product_vendor_id(product: Any) -> None:
    """Vendor IDs are free-form; there is nothing to report."""
    return None


def validate_product_ingredients_list(product: Any) -> str:
    ingredients = _field(product, "ingredients_list")
    if ingredients is None:
        return "-IngredientsList is null."
    if not isinstance(ingredients, (list, tuple)):
        return PRODUCT_INGREDIENTS_NOT_LIST
    if len(ingredients) == 0:
        return "-IngredientsList is empty."
    return ""


def validate_product_classification(product: Any) -> str:
    """Classification must be exactly "Drink" or "Baked Good"."""
    classification = _field(product, "classification")
    error = check_required_string(classification, "Classification")
    if error:
        return f"-{error}"
    if classification not in {member.value for member in ProductClassification}:
        return PRODUCT_CLASSIFICATION_INVALID
    return ""


def validate_product_type(product: Any) -> str:
    """Type must be Coffee, Tea or Soda in any letter case."""
    product_type = _field(product, "type")
    error = check_required_string(product_type, "Type")
    if error:
        return f"-{error}"
    if not ProductType.matches(product_type):
        return PRODUCT_TYPE_INVALID
    return ""


def validate_product_cost(product: Any) -> str:
    error = check_required_number(_field(product, "cost"), "Cost")
    return f"-{error}" if error else ""


def validate_product_markup(product: Any) -> str:
    error = check_required_number(_field(product, "markup"), "Markup")
    return f"-{error}" if error else ""


def validate_product_allergen_list(product: Any) -> str:
    """An empty allergen list is valid; a missing one is not."""
    allergens = _field(product, "allergen_list")
    if allergens is None:
        return "-AllergenList is null."
    if not isinstance(allergens, (list, tuple)):
        return PRODUCT_ALLERGEN_NOT_LIST
    if any(not Allergen.matches(allergen) for allergen in allergens):
        return PRODUCT_ALLERGEN_INVALID
    return ""


# Concatenation order is part of the API response contract
PRODUCT_FIELD_VALIDATORS = (
    validate_product_description,
    validate_product_name,
    validate_product_classification,
    validate_product_type,
    validate_product_cost,
    validate_product_markup,
    validate_product_ingredients_list,
    validate_product_allergen_list,
)


def collect_product_errors(product: Any) -> List[str]:
    """Run every product field check and return the failing messages in order."""
    return _collect(check(product) for check in PRODUCT_FIELD_VALIDATORS)


def validate_product(product: Any) -> str:
    """
    Validate a product record.

    Args:
        product: Product payload or model instance

    Returns:
        Concatenated error messages, e.g. "-Name is null.-Cost is null.",
        or "" when the product is valid

    Example:
        >>> validate_product({})
        '-Description is null.-Name is null.-Classification is null.-Type is null.-Cost is null.-Markup is null.-IngredientsList is null.-AllergenList is null.'
    """
    return "".join(collect_product_errors(product))


def is_unique_product(name: str, existing_products: Iterable[Any]) -> str:
    """
    Check a product name against existing products, ignoring case.

    Callers editing a product must leave that product out of
    ``existing_products`` so it does not conflict with itself.

    Returns:
        Conflict message if the name is taken, otherwise ""
    """
    folded = (name or "").casefold()
    for existing in existing_products:
        existing_name = _field(existing, "name")
        if existing_name is not None and existing_name.casefold() == folded:
            return PRODUCT_NAME_CONFLICT
    return ""


# ============================================================================
# Product pricing and formatting
# ============================================================================


def calculate_sales_price(product: Any) -> str:
    """
    Compute the sale price as cost * (1 + markup), rendered with 2 decimals.

    Only call this on a product that passed validation.

    Raises:
        NumberFormatError: If cost or markup is not numeric

    Example:
        >>> calculate_sales_price({"cost": "10.00", "markup": "2.00"})
        '30.00'
    """
    cost = parse_decimal(_field(product, "cost"))
    markup = parse_decimal(_field(product, "markup"))
    with amount_context(cost, markup):
        price = cost * (1 + markup)
        return f"{price.quantize(TWO_PLACES, rounding=ROUND_HALF_UP):f}"


def format_product(product: Mapping[str, Any]) -> dict:
    """
    Return a copy of a product payload with dollar fields normalized.

    Cost and markup are rendered with 2 decimals and sale_price is filled
    in from calculate_sales_price(). Name, classification and type are left
    exactly as supplied.

    Raises:
        NumberFormatError: If cost or markup is not numeric
    """
    formatted = dict(product)
    formatted["cost"] = format_dollar_value(product["cost"])
    formatted["markup"] = format_dollar_value(product["markup"])
    formatted["sale_price"] = calculate_sales_price(product)
    return formatted
