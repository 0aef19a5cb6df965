"""
Store Module for the knowledge base.

Read-only facade over the SQLite reference database:
1. Opening the database file in read-only mode.
2. Running parameterized queries (parameters are always bound by name).
3. Returning rows as plain dicts (column name → scalar).
"""

import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Mapping

from kb.config import settings
from kb.errors import StoreUnavailable

# --- Logging ---
logger = logging.getLogger(__name__)


class KnowledgeStore:
    """Facade for the reference tables."""

    def __init__(self, db_path: Path = None):
        """
        Args:
            db_path: Filesystem path to the SQLite file. Defaults to settings.DATABASE_PATH.

        Raises:
            StoreUnavailable: if the database does not exist or cannot be opened.
        """
        self.db_path = Path(db_path or settings.DATABASE_PATH)

        if not self.db_path.exists():
            logger.error(f"Database not found at '{self.db_path}'")
            raise StoreUnavailable(f"Database not found: {self.db_path}")

        try:
            self.conn = sqlite3.connect(f"{self.db_path.resolve().as_uri()}?mode=ro", uri=True)
            self.conn.row_factory = sqlite3.Row
        except sqlite3.Error as e:
            logger.error(f"Failed to open database '{self.db_path}': {e}")
            raise StoreUnavailable(str(e)) from e

    def query(self, sql: str, params: Mapping[str, Any] = None) -> List[Dict[str, Any]]:
        """
        Runs one query with named parameters.

        Raises:
            StoreUnavailable: on any database error.
        """
        try:
            cursor = self.conn.execute(sql, dict(params or {}))
            return [dict(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            logger.error(f"Query failed: {e}")
            raise StoreUnavailable(str(e)) from e

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "KnowledgeStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
