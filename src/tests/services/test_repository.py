"""Tests for the Repository storage contract."""

from decimal import Decimal

from src.models import Ingredient
from src.services.database import session_scope
from src.services.repository import Repository


def _ingredient(name):
    return Ingredient(
        name=name,
        purchasing_cost=Decimal("1.00"),
        amount=Decimal("1.00"),
        unit_of_measure="EA",
        allergens=[],
    )


def test_save_assigns_id(test_db):
    with session_scope() as session:
        saved = Repository(session, Ingredient).save(_ingredient("Sugar"))
        assert saved.id is not None


def test_find_by_name_ignore_case_is_exact(test_db):
    with session_scope() as session:
        repository = Repository(session, Ingredient)
        repository.save(_ingredient("Sugar"))
        repository.save(_ingredient("Brown Sugar"))

        matches = repository.find_by_name_ignore_case("SUGAR")

        assert [m.name for m in matches] == ["Sugar"]


def test_find_by_id_missing_returns_none(test_db):
    with session_scope() as session:
        assert Repository(session, Ingredient).find_by_id(123) is None


def test_delete_by_id(test_db):
    with session_scope() as session:
        repository = Repository(session, Ingredient)
        saved = repository.save(_ingredient("Salt"))

        repository.delete_by_id(saved.id)

        assert repository.find_all() == []
