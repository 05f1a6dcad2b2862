"""Services package - Business logic layer for Catalog Manager.

This package contains all service modules that provide business logic
and database operations for the application.

Architecture:
- Services: Stateless functions organized by resource (ingredient, product)
- Transactions: Managed via session_scope() context manager
- Storage: Repository wraps a session with find/save/delete primitives
- Exceptions: Consistent error handling via ServiceError hierarchy
- Validation: Input formatting and validation before database operations

Service Modules:
- ingredient_service: Ingredient catalog CRUD operations
- product_service: Product catalog CRUD operations with derived sale price

Infrastructure:
- exceptions: Custom exception classes for service layer errors
- database: Session management and database utilities
- formatters: Decimal rounding and string normalization
- repository: Storage contract over a SQLAlchemy session
- logging_utils: Structured operation logging
"""

# Submodules are imported explicitly by callers (src.services.product_service,
# ...); importing them here would create a cycle with src.utils.validators.
