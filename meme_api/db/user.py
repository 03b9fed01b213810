"""User credential operations.

IMPORT CONVENTION:
- Core accesses these through core.user property
- Password hashing happens in auth.service; this layer stores opaque hashes
"""

import sqlite3

from ..utils import isodatetime


class UserOperations:
    """User table operations.

    Users are insert-only: there is no update or delete path.
    """

    def __init__(self, conn: sqlite3.Connection):
        """Initialize user operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def get_by_username(self, username: str) -> sqlite3.Row | None:
        """Get user row (including password_hash) by exact username.

        Returns:
            sqlite3.Row with id, username, password_hash, created_at or None
        """
        return self._conn.execute(
            "SELECT id, username, password_hash, created_at FROM users WHERE username = ?",
            (username,)
        ).fetchone()

    def create(self, username: str, password_hash: str) -> int:
        """Insert a user and return its auto-generated integer ID.

        Raises:
            sqlite3.IntegrityError: If the username is already taken
        """
        cursor = self._conn.execute(
            """INSERT INTO users (username, password_hash, created_at)
               VALUES (?, ?, ?)""",
            (username, password_hash, isodatetime.now())
        )
        return cursor.lastrowid
