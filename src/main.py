"""
Main entry point for the Catalog Manager application.

This module configures logging, sets up the database and hands the
command line over to the catalog CLI.
"""

import sys
import traceback
from typing import List, Optional

from src.services.database import close_connections, initialize_app_database
from src.services.logging_utils import configure_logging
from src.utils import catalog_cli
from src.utils.config import get_config


def initialize_application() -> bool:
    """
    Initialize the application.

    Returns:
        True if initialization successful, False otherwise
    """
    try:
        initialize_app_database()
        return True
    except Exception as e:
        print(f"ERROR: Failed to initialize application: {e}", file=sys.stderr)
        traceback.print_exc()
        return False


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main application entry point.

    Returns:
        Process exit status
    """
    config = get_config()
    configure_logging(config.log_level)

    if not initialize_application():
        print("Application initialization failed. Exiting.", file=sys.stderr)
        return 1

    try:
        return catalog_cli.main(argv)
    finally:
        close_connections()


if __name__ == "__main__":
    sys.exit(main())
