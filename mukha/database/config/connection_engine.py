"""
Connection Engine (SQLAlchemy)

Purpose
-------
Centralizes database initialization for the application:
- Creates the Engine (connection pool + SQL execution entry point) from
  `settings.DATABASE_URL`.
- Defines shared MetaData for table and schema objects.
- Exposes a Declarative Base class for ORM models.

Notes
-----
- When `DATABASE_URL` is unset the engine is ``None``; the transaction layer
  then refuses every store operation with `StoreUnavailableError`.
- SQLite URLs are opened with ``check_same_thread=False`` because FastAPI runs
  sync handlers in a threadpool; in-memory SQLite shares one connection.
"""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from sqlalchemy.schema import MetaData

from mukha.database.config.config import settings


def build_engine(url: Optional[str]) -> Optional[Engine]:
    """
    Create an Engine for ``url``, or return None when no URL is configured.

    Parameters
    ----------
    url : str | None
        SQLAlchemy connection URL (e.g. ``postgresql+psycopg2://...``, ``sqlite://``).

    Returns
    -------
    Engine | None
    """
    if not url:
        return None
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


connection_engine = build_engine(settings.DATABASE_URL)
"""Engine object: Core interface to the database, or None without a DATABASE_URL."""

metadata = MetaData()
"""Metadata object: Stores schema-level information about tables, constraints, indexes, etc."""

declarativeBase = declarative_base(metadata=metadata)
"""Declarative Base: Root class for ORM models."""


def create_tables(engine: Optional[Engine] = None) -> bool:
    """
    Create every mapped table that does not exist yet.

    Returns
    -------
    bool
        False when there is no engine to create them on.
    """
    engine = engine or connection_engine
    if engine is None:
        return False
    # entities must be imported so their tables are registered on `metadata`
    import mukha.database.entities  # noqa: F401

    metadata.create_all(bind=engine)
    return True
