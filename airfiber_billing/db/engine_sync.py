# airfiber_billing/db/engine_sync.py
"""
Synchronous SQLModel engine shared by the whole application.
SQLite (default) runs in WAL mode to avoid "database is locked" under
concurrent requests; any other DATABASE_URL is used as-is.
"""
from typing import Generator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..core.config import get_settings


def build_engine(database_url: str, **kwargs) -> Engine:
    """Create an engine, enabling WAL and cross-thread use for SQLite."""
    is_sqlite = database_url.startswith("sqlite")
    connect_args = {"check_same_thread": False} if is_sqlite else {}
    engine = create_engine(database_url, echo=False, connect_args=connect_args, **kwargs)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL;")
            cursor.close()

    return engine


sync_engine = build_engine(get_settings().resolved_database_url)


def get_sync_session() -> Generator[Session, None, None]:
    """
    Dependency for SYNC SQLModel session injection.
    Usage: session: Session = Depends(get_sync_session)
    """
    with Session(sync_engine) as session:
        yield session


def create_sync_db_and_tables(engine: Engine = sync_engine) -> None:
    """Create the ``clients`` table if it does not exist yet."""
    # Models must be imported so their tables are registered on the metadata
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
