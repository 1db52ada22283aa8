"""Database configuration and session management for SQLite.

The checklist engine relies on two uniqueness constraints enforced here at
the storage layer rather than in Python:

    - ``(show_id, template_key, entity_key)`` on checklist items, so two
      concurrent seed requests cannot both insert the same blueprint
      instance. The loser's insert fails and is treated as a no-op.

    - ``(show_id, phase, sort_order)`` on checklist items, so display order
      stays unambiguous within a phase.

SQLite Configuration Choices:
    - **WAL (Write-Ahead Logging)**: concurrent readers while a secretary
      saves an item.
    - **Foreign Keys**: disabled by default in SQLite; enabled so items
      cannot reference a missing show or upload.
    - **check_same_thread=False**: FastAPI may hand the session to a
      different worker thread than the one that opened it.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from showcompliance.core.config import settings

connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


@sa_event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection.

    These settings are connection-level, not database-level, so they must
    be set each time a new connection is established from the pool.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_and_tables():
    """Create all database tables."""
    # Import models so their tables are registered on the metadata
    import showcompliance.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
