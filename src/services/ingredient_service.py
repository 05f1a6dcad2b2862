"""Ingredient Service - CRUD operations for the ingredient catalog.

This module provides business logic for managing ingredients: formatting and
validation of incoming payloads, lookup by ID or name, and deletion.

All functions accept an optional session for transactional atomicity; when
none is given they open their own session_scope().

Key Features:
- Purchasing cost and amount rounded to 2 decimal places before saving
- Unit of measure normalized to uppercase
- All field errors reported together (ValidationError, 400)
- Missing records reported as IngredientNotFound (404)

Example Usage:
    >>> from src.services.ingredient_service import create_ingredient
    >>> ingredient = create_ingredient({
    ...     "name": "Whole Milk",
    ...     "purchasing_cost": "3.499",
    ...     "amount": 1,
    ...     "unit_of_measure": "gal",
    ...     "allergens": ["Dairy"],
    ... })
    >>> ingredient.purchasing_cost, ingredient.unit_of_measure
    (Decimal('3.50'), 'GAL')
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models import Ingredient
from src.services.database import session_scope
from src.services.exceptions import (
    DatabaseError,
    IngredientNotFound,
    InvalidQuery,
    ValidationError,
)
from src.services.formatters import format_amount, is_number, uppercase
from src.services.logging_utils import get_service_logger, log_operation
from src.services.repository import Repository
from src.utils.constants import (
    EMPTY_NAME_QUERY,
    INGREDIENT_EDIT_NOT_FOUND,
    INGREDIENT_NAME_NOT_FOUND,
    INGREDIENT_NOT_FOUND,
)
from src.utils.validators import validate_ingredient

logger = get_service_logger(__name__)

INGREDIENT_FIELDS = (
    "active",
    "name",
    "purchasing_cost",
    "amount",
    "unit_of_measure",
    "allergens",
)


def format_ingredient_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize an ingredient payload ahead of validation.

    Numeric fields are only rounded when they already parse; anything else is
    left untouched so validate_ingredient() can report it.

    Returns:
        New dict; the input is not modified
    """
    formatted = dict(data)
    for key in ("purchasing_cost", "amount"):
        if is_number(formatted.get(key)):
            formatted[key] = format_amount(formatted[key])
    if isinstance(formatted.get("unit_of_measure"), str):
        formatted["unit_of_measure"] = uppercase(formatted["unit_of_measure"].strip())
    if isinstance(formatted.get("name"), str):
        formatted["name"] = formatted["name"].strip()
    return formatted


def _prepare_ingredient(data: Dict[str, Any], operation: str) -> Dict[str, Any]:
    """Format then validate; returns the column values to persist."""
    formatted = format_ingredient_fields(data)
    errors = validate_ingredient(formatted)
    if errors:
        log_operation(
            logger,
            operation=operation,
            outcome="validation_failed",
            level=logging.WARNING,
            errors=errors,
        )
        raise ValidationError(errors)

    fields = {key: formatted[key] for key in INGREDIENT_FIELDS if key in formatted}
    fields.setdefault("active", True)
    if fields.get("allergens") is None:
        fields["allergens"] = []
    return fields


# ============================================================================
# Queries
# ============================================================================


def get_ingredients(session: Optional[Session] = None) -> List[Ingredient]:
    """Retrieve all ingredients, ordered by ID.

    Raises:
        DatabaseError: If database operation fails
    """
    try:
        if session is not None:
            return Repository(session, Ingredient).find_all()
        with session_scope() as session:
            return Repository(session, Ingredient).find_all()
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to retrieve ingredients", original_error=e) from e


def get_ingredient_by_id(ingredient_id: int, session: Optional[Session] = None) -> Ingredient:
    """Retrieve an ingredient by ID.

    Raises:
        IngredientNotFound: If ingredient doesn't exist
        DatabaseError: If database operation fails
    """
    try:
        if session is not None:
            return _get_ingredient_by_id_impl(ingredient_id, session)
        with session_scope() as session:
            return _get_ingredient_by_id_impl(ingredient_id, session)
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to retrieve ingredient {ingredient_id}", original_error=e) from e


def _get_ingredient_by_id_impl(ingredient_id: int, session: Session) -> Ingredient:
    ingredient = Repository(session, Ingredient).find_by_id(ingredient_id)
    if ingredient is None:
        raise IngredientNotFound(ingredient_id, INGREDIENT_NOT_FOUND)
    return ingredient


def get_ingredients_by_name(name: str, session: Optional[Session] = None) -> List[Ingredient]:
    """Retrieve every ingredient whose name matches exactly, ignoring case.

    Raises:
        InvalidQuery: If name is empty
        IngredientNotFound: If nothing matches
        DatabaseError: If database operation fails
    """
    if not name or not name.strip():
        raise InvalidQuery(EMPTY_NAME_QUERY)

    try:
        if session is not None:
            return _get_ingredients_by_name_impl(name, session)
        with session_scope() as session:
            return _get_ingredients_by_name_impl(name, session)
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to search ingredients for '{name}'", original_error=e) from e


def _get_ingredients_by_name_impl(name: str, session: Session) -> List[Ingredient]:
    matches = Repository(session, Ingredient).find_by_name_ignore_case(name)
    if not matches:
        raise IngredientNotFound(name, INGREDIENT_NAME_NOT_FOUND)
    return matches


# ============================================================================
# Commands
# ============================================================================


def create_ingredient(data: Dict[str, Any], session: Optional[Session] = None) -> Ingredient:
    """Create a new ingredient.

    Args:
        data: Ingredient payload (name, purchasing_cost, amount,
              unit_of_measure, allergens, active). Any "id" is ignored.
        session: Optional database session for transactional atomicity

    Returns:
        Created Ingredient with its assigned ID

    Raises:
        ValidationError: If any field is invalid
        DatabaseError: If database operation fails
    """
    fields = _prepare_ingredient(data, "create_ingredient")

    try:
        if session is not None:
            return _create_ingredient_impl(fields, session)
        with session_scope() as session:
            return _create_ingredient_impl(fields, session)
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to create ingredient", original_error=e) from e


def _create_ingredient_impl(fields: Dict[str, Any], session: Session) -> Ingredient:
    ingredient = Repository(session, Ingredient).save(Ingredient(**fields))
    log_operation(logger, operation="create_ingredient", outcome="success", ingredient_id=ingredient.id)
    return ingredient


def edit_ingredient(
    ingredient_id: int, data: Dict[str, Any], session: Optional[Session] = None
) -> Ingredient:
    """Replace an existing ingredient's fields.

    The stored ID is always ``ingredient_id``; an "id" in the payload is
    discarded.

    Raises:
        IngredientNotFound: If ingredient doesn't exist
        ValidationError: If any field is invalid
        DatabaseError: If database operation fails
    """
    try:
        if session is not None:
            return _edit_ingredient_impl(ingredient_id, data, session)
        with session_scope() as session:
            return _edit_ingredient_impl(ingredient_id, data, session)
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to update ingredient {ingredient_id}", original_error=e) from e


def _edit_ingredient_impl(ingredient_id: int, data: Dict[str, Any], session: Session) -> Ingredient:
    repository = Repository(session, Ingredient)
    ingredient = repository.find_by_id(ingredient_id)
    if ingredient is None:
        log_operation(
            logger,
            operation="edit_ingredient",
            outcome="not_found",
            level=logging.WARNING,
            ingredient_id=ingredient_id,
        )
        raise IngredientNotFound(ingredient_id, INGREDIENT_EDIT_NOT_FOUND)

    fields = _prepare_ingredient(data, "edit_ingredient")
    ingredient.update_from_dict(fields)
    ingredient.id = ingredient_id

    ingredient = repository.save(ingredient)
    log_operation(logger, operation="edit_ingredient", outcome="success", ingredient_id=ingredient_id)
    return ingredient


def delete_ingredient_by_id(ingredient_id: int, session: Optional[Session] = None) -> None:
    """Delete an ingredient.

    Raises:
        IngredientNotFound: If ingredient doesn't exist (nothing is deleted)
        DatabaseError: If database operation fails
    """
    try:
        if session is not None:
            return _delete_ingredient_impl(ingredient_id, session)
        with session_scope() as session:
            return _delete_ingredient_impl(ingredient_id, session)
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to delete ingredient {ingredient_id}", original_error=e) from e


def _delete_ingredient_impl(ingredient_id: int, session: Session) -> None:
    repository = Repository(session, Ingredient)
    if repository.find_by_id(ingredient_id) is None:
        log_operation(
            logger,
            operation="delete_ingredient",
            outcome="not_found",
            level=logging.WARNING,
            ingredient_id=ingredient_id,
        )
        raise IngredientNotFound(ingredient_id, INGREDIENT_NOT_FOUND)

    repository.delete_by_id(ingredient_id)
    log_operation(logger, operation="delete_ingredient", outcome="success", ingredient_id=ingredient_id)
