from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Callable, Iterator

from keydash.errors import StoreError


class BaseRepository:
    """Base repository with helper to run queries."""
    def __init__(self, db_factory: Callable[[], sqlite3.Connection]):
        self._db_factory = db_factory

    @contextmanager
    def _cursor(self, operation: str) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success and raise StoreError on driver failures."""
        try:
            conn = self._db_factory()
        except sqlite3.Error as e:
            raise StoreError(f"Could not open database: {e}", operation=operation) from e
        try:
            cursor = conn.cursor()
            yield cursor
            conn.commit()
        except (sqlite3.Error, OverflowError) as e:
            raise StoreError(f"Database {operation} failed: {e}", operation=operation) from e
        finally:
            conn.close()
