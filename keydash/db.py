from __future__ import annotations

import logging
import os
import sqlite3

from keydash.config import Config

logger = logging.getLogger(__name__)

DATABASE_PATH = Config.DATABASE_PATH


def _get_database_path() -> str:
    """Resolve database path at runtime (supports tests overriding env)."""
    return os.getenv('DATABASE_PATH', DATABASE_PATH)


def get_db(database_path: str | None = None) -> sqlite3.Connection:
    """Get database connection."""
    return sqlite3.connect(database_path or _get_database_path())


def init_db(database_path: str | None = None) -> None:
    """Initialize SQLite database."""
    conn = get_db(database_path)
    try:
        cursor = conn.cursor()

        # Same columns as the hosted api_keys table
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS api_keys (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                value TEXT NOT NULL,
                user_id TEXT NOT NULL,
                usage_count INTEGER NOT NULL DEFAULT 0,
                max_usage INTEGER NOT NULL,
                "createdAt" TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        cursor.execute('CREATE INDEX IF NOT EXISTS idx_api_keys_user_id ON api_keys(user_id)')

        conn.commit()
    finally:
        conn.close()
    logger.info('Database initialized')


def ensure_data_dir(database_path: str | None = None) -> None:
    data_dir = os.path.dirname(database_path or _get_database_path()) or '.'
    os.makedirs(data_dir, exist_ok=True)
