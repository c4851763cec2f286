"""
Database connection management.

Supports:
  - SQLite (local dev / tests, no setup)
  - PostgreSQL (Docker / production)

Connection string comes from settings.database_url (DATABASE_URL env var).
"""

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from docsign.infrastructure.db.models import Base

logger = logging.getLogger(__name__)

# Default to SQLite for zero-setup local dev
DEFAULT_DB_URL = "sqlite:///docsign.db"


def create_db_engine(url: str = None):
    """Create SQLAlchemy engine."""
    db_url = url or DEFAULT_DB_URL

    if db_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}, "echo": False}
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session sees an empty DB
            kwargs["poolclass"] = StaticPool
        engine = create_engine(db_url, **kwargs)
    else:
        # PostgreSQL
        engine = create_engine(
            db_url,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
            echo=False,
        )

    return engine


class Database:
    """Owns the engine + session factory. Injected into the repositories."""

    def __init__(self, url: str = None):
        self.url = url or DEFAULT_DB_URL
        self.engine = create_db_engine(self.url)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    def init(self):
        """Create all tables. Safe to call multiple times."""
        Base.metadata.create_all(self.engine)
        logger.info(f"Database initialized: {self.url.split('@')[-1] if '@' in self.url else self.url}")

    @contextmanager
    def session(self) -> Session:
        """Context manager for database sessions."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @property
    def backend_name(self) -> str:
        return "PostgreSQL" if "postgres" in self.url else "SQLite"
