"""Catalog Import Service - bulk loading of ingredients and products.

Reads a JSON document of the form::

    {
        "ingredients": [{"name": ..., "purchasing_cost": ..., ...}, ...],
        "products": [{"name": ..., "cost": ..., "markup": ..., ...}, ...]
    }

Each record goes through the same create pipeline as a single create call
and is committed on its own, so one bad record does not block the rest.
Products whose name is already taken are skipped rather than failed.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from src.services import ingredient_service, product_service
from src.services.exceptions import ProductNameConflict, ServiceError
from src.services.logging_utils import get_service_logger, log_operation

logger = get_service_logger(__name__)

INVALID_RECORD = "Record must be a JSON object."


class ImportResult:
    """Result of an import operation with per-entity tracking."""

    def __init__(self):
        self.total_records = 0
        self.successful = 0
        self.skipped = 0
        self.failed = 0
        self.errors: List[Dict[str, Any]] = []
        self.warnings: List[Dict[str, Any]] = []
        self.entity_counts: Dict[str, Dict[str, int]] = {}

    def _ensure_entity(self, entity_type: str) -> None:
        self.entity_counts.setdefault(entity_type, {"imported": 0, "skipped": 0, "errors": 0})

    def add_success(self, entity_type: str) -> None:
        """Record a successful import."""
        self.successful += 1
        self.total_records += 1
        self._ensure_entity(entity_type)
        self.entity_counts[entity_type]["imported"] += 1

    def add_skip(self, record_type: str, record_name: str, reason: str) -> None:
        """Record a skipped record."""
        self.skipped += 1
        self.total_records += 1
        self._ensure_entity(record_type)
        self.entity_counts[record_type]["skipped"] += 1
        self.warnings.append(
            {
                "record_type": record_type,
                "record_name": record_name,
                "warning_type": "skipped",
                "message": reason,
            }
        )

    def add_error(self, record_type: str, record_name: str, error: str) -> None:
        """Record a failed import."""
        self.failed += 1
        self.total_records += 1
        self._ensure_entity(record_type)
        self.entity_counts[record_type]["errors"] += 1
        self.errors.append(
            {
                "record_type": record_type,
                "record_name": record_name,
                "error_type": "import_error",
                "message": error,
            }
        )

    @property
    def success(self) -> bool:
        return self.failed == 0

    def get_summary(self) -> str:
        """Human-readable multi-line summary."""
        lines = [
            f"Processed {self.total_records} record(s): "
            f"{self.successful} imported, {self.skipped} skipped, {self.failed} failed"
        ]
        for entity_type, counts in sorted(self.entity_counts.items()):
            lines.append(
                f"  {entity_type}: {counts['imported']} imported, "
                f"{counts['skipped']} skipped, {counts['errors']} failed"
            )
        for error in self.errors:
            lines.append(f"  ERROR {error['record_type']} '{error['record_name']}': {error['message']}")
        for warning in self.warnings:
            lines.append(
                f"  SKIPPED {warning['record_type']} '{warning['record_name']}': {warning['message']}"
            )
        return "\n".join(lines)


def import_catalog(data: Dict[str, Any]) -> ImportResult:
    """Import ingredients then products from an already-parsed document."""
    result = ImportResult()

    for record in data.get("ingredients") or []:
        if not isinstance(record, dict):
            result.add_error("ingredient", str(record), INVALID_RECORD)
            continue
        record_name = str(record.get("name"))
        try:
            ingredient_service.create_ingredient(record)
            result.add_success("ingredient")
        except ServiceError as e:
            result.add_error("ingredient", record_name, e.message)

    for record in data.get("products") or []:
        if not isinstance(record, dict):
            result.add_error("product", str(record), INVALID_RECORD)
            continue
        record_name = str(record.get("name"))
        try:
            product_service.create_product(record)
            result.add_success("product")
        except ProductNameConflict as e:
            result.add_skip("product", record_name, e.message)
        except ServiceError as e:
            result.add_error("product", record_name, e.message)

    log_operation(
        logger,
        operation="import_catalog",
        outcome="success" if result.success else "partial",
        imported=result.successful,
        skipped=result.skipped,
        failed=result.failed,
    )
    return result


def import_catalog_from_json(file_path: Union[str, Path]) -> ImportResult:
    """Read a catalog JSON file and import it.

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the file is not valid JSON
    """
    with open(file_path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    return import_catalog(data)
