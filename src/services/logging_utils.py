"""Service layer logging utilities.

Provides structured logging functions for service operations, enabling
consistent log format and context across ingredient and product services.

Usage:
    from src.services.logging_utils import get_service_logger, log_operation

    logger = get_service_logger(__name__)

    # Log successful operation
    log_operation(
        logger,
        operation="create_product",
        outcome="success",
        product_id=12,
    )

    # Log validation failure
    log_operation(
        logger,
        operation="create_product",
        outcome="validation_failed",
        level=logging.WARNING,
        errors=["-Name is null."],
    )
"""

import logging
from typing import Any, Optional


def get_service_logger(name: str) -> logging.Logger:
    """
    Get a logger configured for service operations.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger instance with the 'catalog.services' prefix.

    Example:
        >>> logger = get_service_logger("src.services.product_service")
        >>> logger.name
        'catalog.services.product_service'
    """
    # Extract just the module name if full path is provided
    if "." in name:
        name = name.split(".")[-1]
    return logging.getLogger(f"catalog.services.{name}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    """
    Log a service operation with structured context.

    The context is passed via the 'extra' parameter for structured logging.

    Args:
        logger: Logger instance to use
        operation: Operation name (e.g., "create_product", "delete_ingredient")
        outcome: Outcome description (e.g., "success", "validation_failed", "not_found")
        level: Log level (default: INFO)
        **context: Additional context fields (entity IDs, error details, etc.)
    """
    extra = {
        "operation": operation,
        "outcome": outcome,
        **context,
    }
    logger.log(level, f"{operation}: {outcome}", extra=extra)


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for command-line use.

    Args:
        level: Level name; defaults to the configured CATALOG_LOG_LEVEL
    """
    if level is None:
        from src.utils.config import get_config

        level = get_config().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
