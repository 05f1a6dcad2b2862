"""Tests for bulk catalog import."""

import json

import pytest

from src.services import catalog_import_service, ingredient_service, product_service


@pytest.fixture
def catalog_document(ingredient_payload, product_payload):
    return {
        "ingredients": [
            ingredient_payload,
            {**ingredient_payload, "name": "Espresso Beans", "unit_of_measure": "lb"},
        ],
        "products": [product_payload],
    }


class TestImportCatalog:
    def test_imports_everything(self, test_db, catalog_document):
        result = catalog_import_service.import_catalog(catalog_document)

        assert result.success
        assert result.successful == 3
        assert result.entity_counts["ingredient"]["imported"] == 2
        assert result.entity_counts["product"]["imported"] == 1
        assert len(ingredient_service.get_ingredients()) == 2
        assert product_service.get_products()[0].sale_price == "4.50"

    def test_invalid_records_are_errors(self, test_db, catalog_document):
        catalog_document["ingredients"].append({"name": "Mystery"})

        result = catalog_import_service.import_catalog(catalog_document)

        assert not result.success
        assert result.failed == 1
        assert result.errors[0]["record_name"] == "Mystery"
        assert "Unit of measure is null." in result.errors[0]["message"]
        assert len(ingredient_service.get_ingredients()) == 2

    def test_duplicate_products_are_skipped(self, test_db, catalog_document, product_payload):
        catalog_document["products"].append({**product_payload, "name": "HOUSE LATTE"})

        result = catalog_import_service.import_catalog(catalog_document)

        assert result.success
        assert result.skipped == 1
        assert result.warnings[0]["message"] == "Product with matching name already exists."
        assert len(product_service.get_products()) == 1

    def test_empty_document(self, test_db):
        result = catalog_import_service.import_catalog({})
        assert result.total_records == 0
        assert result.success

    def test_summary(self, test_db, catalog_document):
        catalog_document["products"].append({"name": "Broken"})
        summary = catalog_import_service.import_catalog(catalog_document).get_summary()

        assert summary.startswith("Processed 4 record(s): 3 imported, 0 skipped, 1 failed")
        assert "ERROR product 'Broken': -Description is null." in summary


def test_import_from_json_file(test_db, tmp_path, catalog_document):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog_document), encoding="utf-8")

    result = catalog_import_service.import_catalog_from_json(path)

    assert result.successful == 3


def test_import_from_invalid_json(test_db, tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(json.JSONDecodeError):
        catalog_import_service.import_catalog_from_json(path)


def test_wrongly_typed_records_do_not_stop_import(test_db, catalog_document, product_payload):
    catalog_document["products"] = [
        {**product_payload, "name": "Broken List", "ingredients_list": 5},
        "not a record",
        product_payload,
    ]

    result = catalog_import_service.import_catalog(catalog_document)

    assert result.failed == 2
    assert result.errors[0]["message"] == "-IngredientsList must be a list."
    assert result.errors[1]["message"] == catalog_import_service.INVALID_RECORD
    assert [p.name for p in product_service.get_products()] == ["House Latte"]
