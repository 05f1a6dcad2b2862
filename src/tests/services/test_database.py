"""Tests for database engine and session management."""

import pytest

from src.services import database


@pytest.fixture
def memory_database(monkeypatch):
    """Point the global engine at a fresh in-memory database."""
    monkeypatch.setenv("CATALOG_DATABASE_URL", "sqlite:///:memory:")
    database.close_connections()
    yield
    database.close_connections()


def test_initialize_creates_catalog_tables(memory_database):
    assert not database.verify_database()

    database.initialize_app_database()

    assert database.verify_database()


def test_session_scope_rolls_back_on_error(memory_database):
    from src.models import Ingredient

    database.initialize_app_database()

    with pytest.raises(RuntimeError):
        with database.session_scope() as session:
            session.add(
                Ingredient(name="Vanilla", purchasing_cost=1, amount=1, unit_of_measure="OZ")
            )
            session.flush()
            raise RuntimeError("abort")

    with database.session_scope() as session:
        assert session.query(Ingredient).count() == 0


def test_close_connections_resets_engine(memory_database):
    first = database.get_engine()
    database.close_connections()
    assert database.get_engine() is not first


def test_main_runs_cli(memory_database, capsys):
    from src.main import main

    assert main(["list-products"]) == 0
    assert capsys.readouterr().out.strip() == "[]"
