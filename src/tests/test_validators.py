"""
Tests for catalog validation functions.

Tests cover:
- Shared required string / number checks
- Ingredient validation (list of messages)
- Product validation (concatenated "-Field ..." segments, fixed order)
- Product name uniqueness
- Sale price calculation and product formatting
"""

from types import SimpleNamespace

import pytest

from src.services.exceptions import NumberFormatError
from src.utils import validators
from src.utils.constants import (
    PRODUCT_ALLERGEN_INVALID,
    PRODUCT_ALLERGEN_NOT_LIST,
    PRODUCT_INGREDIENTS_NOT_LIST,
    PRODUCT_CLASSIFICATION_INVALID,
    PRODUCT_DESCRIPTION_TOO_LONG,
    PRODUCT_NAME_CONFLICT,
    PRODUCT_NAME_TOO_LONG,
    PRODUCT_TYPE_INVALID,
)


class TestSharedChecks:
    """Test the shared required-field checks."""

    def test_required_string_present(self):
        assert validators.check_required_string("Milk", "Name") == ""

    def test_required_string_none(self):
        assert validators.check_required_string(None, "Name") == "Name is null."

    def test_required_string_empty(self):
        assert validators.check_required_string("", "Name") == "Name is empty."

    def test_required_string_whitespace_is_empty(self):
        assert validators.check_required_string("   ", "Name") == "Name is empty."

    def test_required_number_not_a_number(self):
        assert validators.check_required_number("abc", "Cost") == "Cost must be a number."

    def test_required_number_negative(self):
        assert validators.check_required_number("-1", "Cost") == "Cost must not be negative."

    def test_required_number_negative_allowed(self):
        assert validators.check_required_number("-1", "Cost", allow_negative=True) == ""

    def test_required_number_zero_is_valid(self):
        assert validators.check_required_number(0, "Cost") == ""


class TestIngredientValidation:
    """Test validate_ingredient()."""

    def test_valid_ingredient(self, ingredient_payload):
        assert validators.validate_ingredient(ingredient_payload) == []

    def test_all_fields_missing(self):
        """Every failing field is reported, in field order."""
        assert validators.validate_ingredient({}) == [
            "Name is null.",
            "Unit of measure is null.",
            "Purchasing cost is null.",
            "Amount is null.",
        ]

    def test_empty_strings(self, ingredient_payload):
        ingredient_payload.update(name="", unit_of_measure=" ")
        assert validators.validate_ingredient(ingredient_payload) == [
            "Name is empty.",
            "Unit of measure is empty.",
        ]

    def test_non_numeric_amount(self, ingredient_payload):
        ingredient_payload["amount"] = "a lot"
        assert validators.validate_ingredient(ingredient_payload) == ["Amount must be a number."]

    def test_accepts_model_like_objects(self):
        ingredient = SimpleNamespace(
            name="Oat Milk", unit_of_measure="L", purchasing_cost=2, amount=1
        )
        assert validators.validate_ingredient(ingredient) == []

    def test_does_not_mutate_input(self, ingredient_payload):
        snapshot = dict(ingredient_payload)
        validators.validate_ingredient(ingredient_payload)
        assert ingredient_payload == snapshot


class TestProductValidation:
    """Test validate_product() and the per-field checks."""

    def test_valid_product(self, product_payload):
        assert validators.validate_product(product_payload) == ""

    def test_all_fields_missing(self):
        assert validators.validate_product({}) == (
            "-Description is null."
            "-Name is null."
            "-Classification is null."
            "-Type is null."
            "-Cost is null."
            "-Markup is null."
            "-IngredientsList is null."
            "-AllergenList is null."
        )

    def test_vendor_id_is_never_reported(self, product_payload):
        product_payload["vendor_id"] = None
        assert validators.validate_product_vendor_id(product_payload) is None
        assert validators.validate_product(product_payload) == ""

    def test_description_length_boundary(self, product_payload):
        product_payload["description"] = "d" * 99
        assert validators.validate_product_description(product_payload) == ""
        product_payload["description"] = "d" * 100
        assert validators.validate_product_description(product_payload) == PRODUCT_DESCRIPTION_TOO_LONG

    def test_name_length_boundary(self, product_payload):
        product_payload["name"] = "n" * 49
        assert validators.validate_product_name(product_payload) == ""
        product_payload["name"] = "n" * 50
        assert validators.validate_product_name(product_payload) == PRODUCT_NAME_TOO_LONG

    def test_empty_name(self, product_payload):
        product_payload["name"] = ""
        assert validators.validate_product(product_payload) == "-Name is empty."

    def test_classification_must_match_exactly(self, product_payload):
        product_payload["classification"] = "Baked Good"
        assert validators.validate_product_classification(product_payload) == ""
        product_payload["classification"] = "drink"
        assert validators.validate_product_classification(product_payload) == (
            PRODUCT_CLASSIFICATION_INVALID
        )

    @pytest.mark.parametrize("product_type", ["Coffee", "coffee", "TEA", "sOdA"])
    def test_type_ignores_case(self, product_payload, product_type):
        product_payload["type"] = product_type
        assert validators.validate_product_type(product_payload) == ""

    def test_unknown_type(self, product_payload):
        product_payload["type"] = "Juice"
        assert validators.validate_product_type(product_payload) == PRODUCT_TYPE_INVALID

    def test_cost_and_markup_must_be_numbers(self, product_payload):
        product_payload.update(cost="cheap", markup="")
        assert validators.validate_product(product_payload) == (
            "-Cost must be a number.-Markup is empty."
        )

    def test_negative_cost(self, product_payload):
        product_payload["cost"] = "-1.00"
        assert validators.validate_product(product_payload) == "-Cost must not be negative."

    def test_empty_ingredients_list(self, product_payload):
        product_payload["ingredients_list"] = []
        assert validators.validate_product(product_payload) == "-IngredientsList is empty."

    def test_empty_allergen_list_is_valid(self, product_payload):
        product_payload["allergen_list"] = []
        assert validators.validate_product_allergen_list(product_payload) == ""

    def test_allergens_ignore_case(self, product_payload):
        product_payload["allergen_list"] = ["dairy", "GLUTEN", "Nuts", "soy"]
        assert validators.validate_product_allergen_list(product_payload) == ""

    def test_unknown_allergen(self, product_payload):
        product_payload["allergen_list"] = ["Dairy", "Shellfish"]
        assert validators.validate_product_allergen_list(product_payload) == (
            PRODUCT_ALLERGEN_INVALID
        )

    def test_allergen_message_wording(self):
        assert PRODUCT_ALLERGEN_INVALID == "-AllergenList must contain: Diary, Soy, Gluten, or Nuts."

    def test_segments_keep_field_order(self, product_payload):
        product_payload.update(allergen_list=None, name=None, type="Juice")
        assert validators.validate_product(product_payload) == (
            "-Name is null." + PRODUCT_TYPE_INVALID + "-AllergenList is null."
        )


class TestProductUniqueness:
    """Test is_unique_product()."""

    def test_no_conflict(self):
        existing = [{"name": "Mocha"}, {"name": "Chai"}]
        assert validators.is_unique_product("House Latte", existing) == ""

    def test_conflict_ignores_case(self):
        existing = [SimpleNamespace(name="House Latte")]
        assert validators.is_unique_product("HOUSE latte", existing) == PRODUCT_NAME_CONFLICT

    def test_empty_candidates(self):
        assert validators.is_unique_product("House Latte", []) == ""


class TestSalesPrice:
    """Test calculate_sales_price() and format_product()."""

    def test_cost_times_one_plus_markup(self):
        assert validators.calculate_sales_price({"cost": "10.00", "markup": "2.00"}) == "30.00"

    def test_unformatted_inputs(self):
        assert validators.calculate_sales_price({"cost": "5.0", "markup": "5.0"}) == "30.00"

    def test_rounds_half_up(self):
        assert validators.calculate_sales_price({"cost": "1.005", "markup": "0"}) == "1.01"

    def test_non_numeric_cost_raises(self):
        with pytest.raises(NumberFormatError):
            validators.calculate_sales_price({"cost": "abc", "markup": "1"})

    def test_format_product(self, product_payload):
        formatted = validators.format_product(product_payload)
        assert formatted["cost"] == "1.50"
        assert formatted["markup"] == "2.00"
        assert formatted["sale_price"] == "4.50"
        assert formatted["name"] == "House Latte"

    def test_format_product_returns_copy(self, product_payload):
        validators.format_product(product_payload)
        assert product_payload["cost"] == "1.5"
        assert "sale_price" not in product_payload

    def test_format_product_overwrites_sale_price(self, product_payload):
        product_payload["sale_price"] = "999.99"
        assert validators.format_product(product_payload)["sale_price"] == "4.50"


class TestNonTextAndNonListFields:
    """Wrongly-typed payload values are reported, never raised."""

    def test_required_string_rejects_numbers(self):
        assert validators.check_required_string(5, "Name") == "Name must be text."

    def test_ingredient_name_and_unit_must_be_text(self, ingredient_payload):
        ingredient_payload.update(name=5, unit_of_measure=["gal"])
        assert validators.validate_ingredient(ingredient_payload) == [
            "Name must be text.",
            "Unit of measure must be text.",
        ]

    def test_product_name_must_be_text(self, product_payload):
        product_payload["name"] = 5
        assert validators.validate_product(product_payload) == "-Name must be text."

    @pytest.mark.parametrize("value", [5, "Espresso", {"Espresso": 1}])
    def test_ingredients_list_must_be_a_list(self, product_payload, value):
        product_payload["ingredients_list"] = value
        assert validators.validate_product(product_payload) == PRODUCT_INGREDIENTS_NOT_LIST

    @pytest.mark.parametrize("value", [5, "Dairy"])
    def test_allergen_list_must_be_a_list(self, product_payload, value):
        product_payload["allergen_list"] = value
        assert validators.validate_product(product_payload) == PRODUCT_ALLERGEN_NOT_LIST

    def test_non_string_allergen_entry(self, product_payload):
        product_payload["allergen_list"] = ["Dairy", 3]
        assert validators.validate_product(product_payload) == PRODUCT_ALLERGEN_INVALID


class TestLargeAmounts:
    """Amounts past the default decimal precision still validate and price."""

    def test_large_cost_is_valid(self, product_payload):
        product_payload["cost"] = "1e30"
        assert validators.validate_product(product_payload) == ""

    def test_oversized_cost_is_not_a_number(self, product_payload):
        product_payload["cost"] = "1e1000"
        assert validators.validate_product(product_payload) == "-Cost must be a number."

    def test_sales_price_of_large_cost(self):
        price = validators.calculate_sales_price({"cost": "1e30", "markup": "1"})
        assert price == "2" + "0" * 30 + ".00"

    def test_sales_price_of_widest_values(self):
        price = validators.calculate_sales_price({"cost": "9" * 999, "markup": "9" * 999})
        assert price == "9" * 999 + "0" * 999 + ".00"

    def test_format_product_large_cost(self, product_payload):
        product_payload.update(cost="123456789012345678901234567890", markup="0")
        formatted = validators.format_product(product_payload)
        assert formatted["cost"] == "123456789012345678901234567890.00"
        assert formatted["sale_price"] == "123456789012345678901234567890.00"
