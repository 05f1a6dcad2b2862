"""Product Service - CRUD operations for the product catalog.

This module provides business logic for managing sellable products:
validation, case-insensitive name uniqueness, derived sale price, lookup by
ID or name, and deletion.

All functions accept an optional session for transactional atomicity; when
none is given they open their own session_scope().

Write pipeline:
    validate -> check name uniqueness -> format dollar fields -> persist

Dollar fields can only be formatted once they are known to be numeric, so
validation runs first. A product never conflicts with itself on edit.

Example Usage:
    >>> from src.services.product_service import create_product
    >>> product = create_product({
    ...     "description": "Double shot, steamed milk",
    ...     "name": "House Latte",
    ...     "vendor_id": "5",
    ...     "ingredients_list": ["Espresso", "Whole Milk"],
    ...     "classification": "Drink",
    ...     "type": "Coffee",
    ...     "cost": "1.5",
    ...     "markup": "2",
    ...     "allergen_list": ["Dairy"],
    ... })
    >>> product.cost, product.markup, product.sale_price
    ('1.50', '2.00', '4.50')
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models import Product
from src.services.database import session_scope
from src.services.exceptions import (
    DatabaseError,
    InvalidQuery,
    ProductNameConflict,
    ProductNotFound,
    ValidationError,
)
from src.services.logging_utils import get_service_logger, log_operation
from src.services.repository import Repository
from src.utils.constants import (
    EMPTY_NAME_QUERY,
    PRODUCT_DELETE_NOT_FOUND,
    PRODUCT_EDIT_NOT_FOUND,
    PRODUCT_NAME_NOT_FOUND,
    PRODUCT_NOT_FOUND,
)
from src.utils.validators import collect_product_errors, format_product, is_unique_product

logger = get_service_logger(__name__)

PRODUCT_FIELDS = (
    "active",
    "description",
    "name",
    "vendor_id",
    "image_url",
    "ingredients_list",
    "classification",
    "type",
    "cost",
    "markup",
    "allergen_list",
    "sale_price",
)


def _check_product(data: Dict[str, Any], operation: str) -> None:
    errors = collect_product_errors(data)
    if errors:
        log_operation(
            logger,
            operation=operation,
            outcome="validation_failed",
            level=logging.WARNING,
            errors=errors,
        )
        raise ValidationError(errors, separator="")


def _check_unique_name(name: str, candidates: List[Product], operation: str) -> None:
    conflict = is_unique_product(name, candidates)
    if conflict:
        log_operation(
            logger,
            operation=operation,
            outcome="name_conflict",
            level=logging.WARNING,
            product_name=name,
        )
        raise ProductNameConflict(name, conflict)


def _product_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """Format a validated payload into a value for every product column.

    Omitted optional columns come back as None so an edit replaces them too.
    """
    # sale_price is always derived; a client-supplied value is overwritten
    formatted = format_product(data)
    fields = {key: formatted.get(key) for key in PRODUCT_FIELDS}
    if fields["active"] is None:
        fields["active"] = True
    return fields


# ============================================================================
# Queries
# ============================================================================


def get_products(session: Optional[Session] = None) -> List[Product]:
    """Retrieve all products, ordered by ID.

    Raises:
        DatabaseError: If database operation fails
    """
    try:
        if session is not None:
            return Repository(session, Product).find_all()
        with session_scope() as session:
            return Repository(session, Product).find_all()
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to retrieve products", original_error=e) from e


def get_product_by_id(product_id: int, session: Optional[Session] = None) -> Product:
    """Retrieve a product by ID.

    Raises:
        ProductNotFound: If product doesn't exist
        DatabaseError: If database operation fails
    """
    try:
        if session is not None:
            return _get_product_by_id_impl(product_id, session)
        with session_scope() as session:
            return _get_product_by_id_impl(product_id, session)
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to retrieve product {product_id}", original_error=e) from e


def _get_product_by_id_impl(product_id: int, session: Session) -> Product:
    product = Repository(session, Product).find_by_id(product_id)
    if product is None:
        raise ProductNotFound(product_id, PRODUCT_NOT_FOUND)
    return product


def get_products_by_name(name: str, session: Optional[Session] = None) -> List[Product]:
    """Retrieve every product whose name matches exactly, ignoring case.

    Names are only guaranteed unique on write, so this returns a list.

    Raises:
        InvalidQuery: If name is empty
        ProductNotFound: If nothing matches
        DatabaseError: If database operation fails
    """
    if not name or not name.strip():
        raise InvalidQuery(EMPTY_NAME_QUERY)

    try:
        if session is not None:
            return _get_products_by_name_impl(name, session)
        with session_scope() as session:
            return _get_products_by_name_impl(name, session)
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to search products for '{name}'", original_error=e) from e


def _get_products_by_name_impl(name: str, session: Session) -> List[Product]:
    matches = Repository(session, Product).find_by_name_ignore_case(name)
    if not matches:
        raise ProductNotFound(name, PRODUCT_NAME_NOT_FOUND)
    return matches


# ============================================================================
# Commands
# ============================================================================


def create_product(data: Dict[str, Any], session: Optional[Session] = None) -> Product:
    """Create a new product.

    Args:
        data: Product payload. Any "id" or "sale_price" is ignored.
        session: Optional database session for transactional atomicity

    Returns:
        Created Product with formatted dollar fields and derived sale price

    Raises:
        ValidationError: If any field is invalid (message is the concatenated
            "-Field ..." segments)
        ProductNameConflict: If another product already has this name
        DatabaseError: If database operation fails
    """
    _check_product(data, "create_product")

    try:
        if session is not None:
            return _create_product_impl(data, session)
        with session_scope() as session:
            return _create_product_impl(data, session)
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to create product", original_error=e) from e


def _create_product_impl(data: Dict[str, Any], session: Session) -> Product:
    repository = Repository(session, Product)
    _check_unique_name(data["name"], repository.find_all(), "create_product")

    product = repository.save(Product(**_product_fields(data)))
    log_operation(logger, operation="create_product", outcome="success", product_id=product.id)
    return product


def edit_product(product_id: int, data: Dict[str, Any], session: Optional[Session] = None) -> Product:
    """Replace an existing product's fields.

    The stored ID is always ``product_id``; an "id" in the payload is
    discarded.

    Raises:
        ProductNotFound: If product doesn't exist
        ValidationError: If any field is invalid
        ProductNameConflict: If a different product already has this name
        DatabaseError: If database operation fails
    """
    try:
        if session is not None:
            return _edit_product_impl(product_id, data, session)
        with session_scope() as session:
            return _edit_product_impl(product_id, data, session)
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to update product {product_id}", original_error=e) from e


def _edit_product_impl(product_id: int, data: Dict[str, Any], session: Session) -> Product:
    repository = Repository(session, Product)
    product = repository.find_by_id(product_id)
    if product is None:
        log_operation(
            logger,
            operation="edit_product",
            outcome="not_found",
            level=logging.WARNING,
            product_id=product_id,
        )
        raise ProductNotFound(product_id, PRODUCT_EDIT_NOT_FOUND)

    _check_product(data, "edit_product")
    others = [existing for existing in repository.find_all() if existing.id != product_id]
    _check_unique_name(data["name"], others, "edit_product")

    product.update_from_dict(_product_fields(data))
    product.id = product_id

    product = repository.save(product)
    log_operation(logger, operation="edit_product", outcome="success", product_id=product_id)
    return product


def delete_product_by_id(product_id: int, session: Optional[Session] = None) -> None:
    """Delete a product.

    Raises:
        ProductNotFound: If product doesn't exist (nothing is deleted)
        DatabaseError: If database operation fails
    """
    try:
        if session is not None:
            return _delete_product_impl(product_id, session)
        with session_scope() as session:
            return _delete_product_impl(product_id, session)
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to delete product {product_id}", original_error=e) from e


def _delete_product_impl(product_id: int, session: Session) -> None:
    repository = Repository(session, Product)
    if repository.find_by_id(product_id) is None:
        log_operation(
            logger,
            operation="delete_product",
            outcome="not_found",
            level=logging.WARNING,
            product_id=product_id,
        )
        raise ProductNotFound(product_id, PRODUCT_DELETE_NOT_FOUND)

    repository.delete_by_id(product_id)
    log_operation(logger, operation="delete_product", outcome="success", product_id=product_id)
