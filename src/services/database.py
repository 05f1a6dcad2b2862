"""
Database connection and session management for the Catalog Manager.

This module provides:
- Engine creation from Config (SQLite file, in-memory, or any SQLAlchemy URL)
- A process-wide session factory
- Table creation for the ingredient and product models
- session_scope(), the transaction boundary every service call runs in
"""

from typing import Optional
from contextlib import contextmanager
import logging

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..utils.config import get_config
from ..models.base import Base

logger = logging.getLogger(__name__)

CATALOG_TABLES = ("ingredients", "products")

_engine: Optional[Engine] = None
_SessionFactory: Optional[sessionmaker] = None


@event.listens_for(Engine, "connect")
def _set_sqlite_pragma(dbapi_connection, connection_record):
    """Apply SQLite pragmas to each new connection; other drivers are left alone."""
    if type(dbapi_connection).__module__.split(".")[0] not in ("sqlite3", "pysqlite2"):
        return

    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


def create_database_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Build an engine for the catalog database.

    Args:
        database_url: SQLAlchemy URL; defaults to Config.database_url
        echo: Log SQL statements; defaults to Config.echo_sql

    Returns:
        Configured SQLAlchemy Engine
    """
    config = get_config()
    if database_url is None:
        config.ensure_directories()
        database_url = config.database_url
    if echo is None:
        echo = config.echo_sql

    logger.info(f"Creating database engine: {database_url}")

    if ":memory:" in database_url or "mode=memory" in database_url:
        # One shared connection, otherwise each checkout sees an empty database
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": config.db_timeout},
        )
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


def init_database(engine: Optional[Engine] = None) -> None:
    """
    Create the catalog tables. Existing tables are left untouched.

    Args:
        engine: Engine to use; defaults to the global engine
    """
    if engine is None:
        engine = get_engine()

    # Registers Ingredient and Product with Base.metadata
    from ..models import ingredient, product  # noqa: F401

    Base.metadata.create_all(engine)
    logger.info("Catalog tables created")


def get_engine(force_recreate: bool = False) -> Engine:
    """Return the global engine, creating it on first use."""
    global _engine

    if _engine is None or force_recreate:
        _engine = create_database_engine()

    return _engine


def get_session_factory() -> sessionmaker:
    """Return the global session factory bound to get_engine()."""
    global _SessionFactory

    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=get_engine(), expire_on_commit=False)

    return _SessionFactory


def get_session() -> Session:
    return get_session_factory()()


@contextmanager
def session_scope():
    """
    Transaction boundary for service operations.

    Commits when the block exits normally, rolls back on any exception and
    always closes the session. Entities stay readable after the block
    because the factory does not expire them on commit.

    Yields:
        Database session

    Example:
        with session_scope() as session:
            product = product_service.create_product(payload, session=session)
            product_service.get_products(session=session)
    """
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def verify_database() -> bool:
    """Return True if every catalog table exists."""
    try:
        tables = inspect(get_engine()).get_table_names()
    except Exception as e:
        logger.error(f"Database verification failed: {e}")
        return False
    return all(table in tables for table in CATALOG_TABLES)


def close_connections() -> None:
    """Dispose of the global engine and forget the session factory."""
    global _engine, _SessionFactory

    _SessionFactory = None

    if _engine is not None:
        _engine.dispose()
        _engine = None
        logger.info("Database connections closed")


def initialize_app_database() -> None:
    """Create the database and its tables if they don't exist yet."""
    config = get_config()

    if config.database_exists():
        logger.info(f"Using existing database at: {config.database_url}")
    else:
        logger.info(f"Creating new database at: {config.database_url}")

    init_database(get_engine())

    if not verify_database():
        logger.warning("Database verification failed - catalog tables are missing")
