"""Service layer exception classes for Catalog Manager.

This module defines all custom exceptions used by the service layer to provide
consistent error handling across the application. Every exception carries an
``http_status_code`` so a transport layer can translate it without knowing the
concrete type.

Exception Hierarchy:
    ServiceError (base, 500)
    ├── ValidationError (400)
    ├── InvalidQuery (400)
    ├── IngredientNotFound (404)
    ├── ProductNotFound (404)
    ├── ProductNameConflict (409)
    ├── DatabaseError (500)
    └── NumberFormatError (500, also a ValueError)
"""

from typing import Any, Dict, List, Optional


class ServiceError(Exception):
    """Base exception for all service layer errors.

    All service-specific exceptions should inherit from this class.

    Args:
        message: Human-readable error message
        correlation_id: Optional identifier tying the error to a request
        **context: Extra structured details (entity ids, field names, ...)
    """

    http_status_code = 500

    def __init__(self, message: str = "", correlation_id: Optional[str] = None, **context: Any):
        self.message = message
        self.correlation_id = correlation_id
        self.context: Dict[str, Any] = context
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for logging or a response body."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "correlation_id": self.correlation_id,
            "http_status_code": self.http_status_code,
            "context": self.context,
        }


class ValidationError(ServiceError):
    """Raised when data validation fails.

    Args:
        errors: Individual field error messages
        separator: String placed between errors in the message

    Example:
        >>> str(ValidationError(["Name is null.", "Amount is null."]))
        'Name is null., Amount is null.'
        >>> str(ValidationError(["-Name is null.", "-Cost is null."], separator=""))
        '-Name is null.-Cost is null.'
    """

    http_status_code = 400

    def __init__(self, errors: List[str], separator: str = ", ", **context: Any):
        self.errors = list(errors)
        super().__init__(separator.join(self.errors), **context)


class InvalidQuery(ServiceError):
    """Raised when a lookup is attempted with an unusable argument."""

    http_status_code = 400


class IngredientNotFound(ServiceError):
    """Raised when an ingredient cannot be found by ID or name.

    Args:
        identifier: The ingredient ID (or name) that was not found
        message: Response text for the failed operation

    Example:
        >>> raise IngredientNotFound(123)
        IngredientNotFound: Ingredient not found.
    """

    http_status_code = 404

    def __init__(self, identifier: Any, message: str = "Ingredient not found.", **context: Any):
        self.identifier = identifier
        super().__init__(message, ingredient=identifier, **context)


class ProductNotFound(ServiceError):
    """Raised when a product cannot be found by ID or name.

    Args:
        identifier: The product ID (or name) that was not found
        message: Response text for the failed operation

    Example:
        >>> raise ProductNotFound(123)
        ProductNotFound: Product not found.
    """

    http_status_code = 404

    def __init__(self, identifier: Any, message: str = "Product not found.", **context: Any):
        self.identifier = identifier
        super().__init__(message, product=identifier, **context)


class ProductNameConflict(ServiceError):
    """Raised when a product name is already used by another product.

    Args:
        name: The conflicting product name
        message: Conflict text produced by the uniqueness check
    """

    http_status_code = 409

    def __init__(
        self,
        name: str,
        message: str = "Product with matching name already exists.",
        **context: Any,
    ):
        self.name = name
        super().__init__(message, name=name, **context)


class DatabaseError(ServiceError):
    """Raised when a database operation fails."""

    def __init__(self, message: str, original_error: Optional[Exception] = None, **context: Any):
        self.original_error = original_error
        super().__init__(f"Database error: {message}", **context)


class NumberFormatError(ServiceError, ValueError):
    """Raised when a value that must be numeric cannot be parsed.

    Formatting helpers raise this on already-invalid data; callers are
    expected to validate before formatting, so it maps to a server error.

    Args:
        value: The offending value
    """

    def __init__(self, value: Any, **context: Any):
        self.value = value
        super().__init__(f"Not a number: {value!r}", value=value, **context)
