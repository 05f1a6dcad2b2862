"""
Catalog CLI Utility

Command-line interface over the ingredient and product services.
Records are printed as JSON; failures print "ERROR <status>: <message>" to
stderr and exit with status 1.

Usage Examples:
    # Create the database tables
    python -m src.utils.catalog_cli init-db

    # List and look up products
    python -m src.utils.catalog_cli list-products
    python -m src.utils.catalog_cli get-product 3
    python -m src.utils.catalog_cli find-product "house latte"

    # Create or edit from a JSON payload file
    python -m src.utils.catalog_cli add-product latte.json
    python -m src.utils.catalog_cli edit-ingredient 7 milk.json

    # Bulk load a catalog document
    python -m src.utils.catalog_cli import catalog.json
"""

import argparse
import json
import sys
from typing import Any, Callable, Dict, List, Optional

from src.services import catalog_import_service, ingredient_service, product_service
from src.services.database import initialize_app_database
from src.utils.error_handler import handle_error


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _read_payload(file_path: str) -> Dict[str, Any]:
    with open(file_path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def _run(operation: str, action: Callable[[], Optional[int]]) -> int:
    """Run a command, translating service errors into an exit status."""
    try:
        return action() or 0
    except Exception as e:
        status, message = handle_error(e, operation=operation)
        print(f"ERROR {status}: {message}", file=sys.stderr)
        return 1


def init_db() -> int:
    print("Initializing database...")
    initialize_app_database()
    print("Database initialized successfully")
    return 0


def list_ingredients() -> int:
    _print_json([ingredient.to_dict() for ingredient in ingredient_service.get_ingredients()])
    return 0


def list_products() -> int:
    _print_json([product.to_dict() for product in product_service.get_products()])
    return 0


def import_catalog(file_path: str) -> int:
    print(f"Importing catalog from {file_path}...")
    result = catalog_import_service.import_catalog_from_json(file_path)
    print(result.get_summary())
    return 0 if result.success else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog-manager",
        description="Ingredient and product catalog management",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Create the database tables:
    catalog-manager init-db

  Find products by name (exact, ignoring case):
    catalog-manager find-product "house latte"

  Edit a product from a JSON payload (the path ID always wins):
    catalog-manager edit-product 3 latte.json
""",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("init-db", help="Create database tables")

    for entity in ("ingredient", "product"):
        subparsers.add_parser(f"list-{entity}s", help=f"List all {entity}s")

        get_parser = subparsers.add_parser(f"get-{entity}", help=f"Show one {entity} by ID")
        get_parser.add_argument("id", type=int, help=f"{entity.capitalize()} ID")

        find_parser = subparsers.add_parser(f"find-{entity}", help=f"Find {entity}s by exact name")
        find_parser.add_argument("name", help="Name to match, ignoring case")

        add_parser = subparsers.add_parser(f"add-{entity}", help=f"Create a {entity} from JSON")
        add_parser.add_argument("file", help="JSON payload file")

        edit_parser = subparsers.add_parser(f"edit-{entity}", help=f"Replace a {entity} from JSON")
        edit_parser.add_argument("id", type=int, help=f"{entity.capitalize()} ID")
        edit_parser.add_argument("file", help="JSON payload file")

        delete_parser = subparsers.add_parser(f"delete-{entity}", help=f"Delete a {entity} by ID")
        delete_parser.add_argument("id", type=int, help=f"{entity.capitalize()} ID")

    import_parser = subparsers.add_parser("import", help="Bulk import a catalog JSON document")
    import_parser.add_argument("file", help="JSON file with 'ingredients' and 'products' lists")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    command = args.command

    if command == "init-db":
        return _run("Initialize database", init_db)
    if command == "list-ingredients":
        return _run("List ingredients", list_ingredients)
    if command == "list-products":
        return _run("List products", list_products)
    if command == "import":
        return _run("Import catalog", lambda: import_catalog(args.file))

    verb, entity = command.split("-", 1)
    service = ingredient_service if entity == "ingredient" else product_service
    operation = f"{verb.capitalize()} {entity}"

    if verb == "get":
        getter = getattr(service, f"get_{entity}_by_id")
        return _run(operation, lambda: _print_json(getter(args.id).to_dict()))
    if verb == "find":
        finder = getattr(service, f"get_{entity}s_by_name")
        return _run(operation, lambda: _print_json([e.to_dict() for e in finder(args.name)]))
    if verb == "add":
        creator = getattr(service, f"create_{entity}")
        return _run(operation, lambda: _print_json(creator(_read_payload(args.file)).to_dict()))
    if verb == "edit":
        editor = getattr(service, f"edit_{entity}")
        return _run(
            operation, lambda: _print_json(editor(args.id, _read_payload(args.file)).to_dict())
        )
    if verb == "delete":
        deleter = getattr(service, f"delete_{entity}_by_id")
        return _run(operation, lambda: deleter(args.id))

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
