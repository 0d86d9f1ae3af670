"""
Database connector — SQLAlchemy engine wrapper handing out catalog connections.
Supports SQLite, PostgreSQL and MySQL. Every crawler accessor acquires its own
connection and releases it before returning.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)


class ConnectionProvider:
    """Owns the engine (and its pool); lends out short-lived connections."""

    def __init__(self, url: str):
        self.url = url
        self.engine: Engine = create_engine(url, pool_pre_ping=True)

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    @contextmanager
    def acquire_connection(self) -> Iterator[Connection]:
        with self.engine.connect() as conn:
            yield conn

    def test_connection(self) -> tuple[bool, Optional[str]]:
        """Returns (True, None) if the catalog answers SELECT 1, (False, error) otherwise."""
        try:
            with self.acquire_connection() as conn:
                conn.execute(text("SELECT 1"))
            return True, None
        except Exception as e:
            logger.warning("Database connectivity probe failed: %s", e)
            return False, str(e)

    def dispose(self) -> None:
        self.engine.dispose()
