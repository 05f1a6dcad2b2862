"""Pytest configuration and fixtures for service layer tests."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, scoped_session
from sqlalchemy.pool import StaticPool

from src.models.base import Base
from src.utils.config import reset_config


@pytest.fixture(scope="function")
def test_db():
    """Provide a clean test database for each test function.

    This fixture:
    1. Creates an in-memory SQLite database
    2. Creates all tables
    3. Provides the database to the test
    4. Drops all tables after the test completes
    """
    # Import all models so their tables are registered with Base
    from src.models import ingredient, product  # noqa: F401

    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(engine)

    session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    Session = scoped_session(session_factory)

    # Monkey-patch the global session factory for tests
    import src.services.database as db_module

    original_get_session = db_module.get_session_factory
    db_module.get_session_factory = lambda: Session

    yield Session

    Session.remove()
    Base.metadata.drop_all(engine)
    engine.dispose()

    db_module.get_session_factory = original_get_session


@pytest.fixture(autouse=True)
def clean_config():
    """Never let a cached Config leak between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def ingredient_payload():
    """A valid ingredient payload."""
    return {
        "name": "Whole Milk",
        "purchasing_cost": "3.499",
        "amount": "1",
        "unit_of_measure": "gal",
        "allergens": ["Dairy"],
    }


@pytest.fixture
def product_payload():
    """A valid product payload."""
    return {
        "description": "Double shot with steamed milk",
        "name": "House Latte",
        "vendor_id": "5",
        "ingredients_list": ["Espresso", "Whole Milk"],
        "classification": "Drink",
        "type": "Coffee",
        "cost": "1.5",
        "markup": "2",
        "allergen_list": ["Dairy"],
    }


@pytest.fixture(scope="function")
def sample_ingredient(test_db, ingredient_payload):
    """Provide a persisted ingredient."""
    from src.services import ingredient_service

    return ingredient_service.create_ingredient(ingredient_payload)


@pytest.fixture(scope="function")
def sample_product(test_db, product_payload):
    """Provide a persisted product."""
    from src.services import product_service

    return product_service.create_product(product_payload)
