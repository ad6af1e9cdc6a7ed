"""
Database Configuration for Imposter Party.

Contains database engine setup, session management, and initialization functions.
"""

import logging
from contextlib import contextmanager
from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from config.settings import DATABASE_URL, SQL_DEBUG, IS_RENDER
from .models import Base

# Configure logging
logger = logging.getLogger(__name__)

# Create session factory; bound to an engine by configure_database()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False)
engine = None

def _lock_on_begin(sqlite_engine):
    """
    Make every SQLite transaction take the database write lock up front.

    SQLite has no SELECT ... FOR UPDATE and pysqlite defers BEGIN until the
    first write, so two sessions could read the same game state and both
    write. Emitting BEGIN IMMEDIATE ourselves serializes them.
    """

    @event.listens_for(sqlite_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sqlite_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return sqlite_engine

def _build_engine(database_url: str):
    """Create an engine with pool settings suited to the backend."""
    # Handle Render's PostgreSQL URL format
    if database_url.startswith('postgres://'):
        database_url = database_url.replace('postgres://', 'postgresql://', 1)

    if database_url in ('sqlite://', 'sqlite:///:memory:'):
        # A single shared connection keeps the in-memory database alive
        return _lock_on_begin(create_engine(
            database_url,
            echo=SQL_DEBUG,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool
        ))

    if database_url.startswith('sqlite'):
        return _lock_on_begin(create_engine(
            database_url,
            echo=SQL_DEBUG,
            connect_args={"check_same_thread": False, "timeout": 30},
            poolclass=NullPool
        ))

    # PostgreSQL configuration
    return create_engine(
        database_url,
        echo=SQL_DEBUG,
        pool_pre_ping=True,
        pool_size=20,
        max_overflow=30,
        pool_timeout=30,
        pool_recycle=3600,  # Recycle connections after 1 hour
    )

def configure_database(database_url: str = None):
    """
    Bind the session factory to a (new) engine.

    Args:
        database_url: SQLAlchemy URL; defaults to DATABASE_URL from settings

    Returns:
        The engine now in use
    """
    global engine

    database_url = database_url or DATABASE_URL
    if IS_RENDER and database_url.startswith('sqlite'):
        logger.warning("Using SQLite on Render; data will not survive a redeploy")

    if engine is not None:
        engine.dispose()

    engine = _build_engine(database_url)
    SessionLocal.configure(bind=engine)
    logger.info(f"Database configured ({engine.url.get_backend_name()})")
    return engine

@contextmanager
def get_db_session():
    """Context manager for database sessions with automatic cleanup."""
    if engine is None:
        configure_database()

    session = SessionLocal()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Database error: {e}")
        raise
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

def init_database(database_url: str = None):
    """Initialize the database, create tables, and seed the default categories."""
    try:
        if database_url or engine is None:
            configure_database(database_url)

        # Create all tables
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")

        from .setters import ensure_default_categories
        with get_db_session() as session:
            created = ensure_default_categories(session)
            if created:
                logger.info(f"Seeded {created} default categories")

    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

def drop_database():
    """Drop every table. Used by tests and local resets."""
    if engine is None:
        return
    Base.metadata.drop_all(bind=engine)
    logger.info("Database tables dropped")
