"""Meme record operations.

IMPORT CONVENTION:
- Core accesses these through core.meme property
- All queries are parameterized
"""

import sqlite3

from ..exceptions import ResourceNotFound
from ..utils import isodatetime


class MemeOperations:
    """Meme table operations."""

    def __init__(self, conn: sqlite3.Connection):
        """Initialize meme operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def list(self) -> list[sqlite3.Row]:
        """List all memes, newest first."""
        return self._conn.execute(
            "SELECT * FROM memes ORDER BY created_at DESC, id DESC"
        ).fetchall()

    def get_by_id(self, meme_id: int) -> sqlite3.Row:
        """Get meme by ID.

        Raises:
            ResourceNotFound: If meme_id doesn't exist
        """
        row = self._conn.execute(
            "SELECT * FROM memes WHERE id = ?",
            (meme_id,)
        ).fetchone()

        if not row:
            raise ResourceNotFound("Meme not found", {"meme_id": meme_id})

        return row

    def get_random(self) -> sqlite3.Row:
        """Get one meme chosen at random.

        Raises:
            ResourceNotFound: If there are no memes
        """
        row = self._conn.execute(
            "SELECT * FROM memes ORDER BY RANDOM() LIMIT 1"
        ).fetchone()

        if not row:
            raise ResourceNotFound("No memes found")

        return row

    def count(self) -> int:
        """Count stored memes."""
        return self._conn.execute("SELECT COUNT(*) FROM memes").fetchone()[0]

    def create(
        self,
        title: str,
        image_url: str,
        description: str | None = None
    ) -> int:
        """Insert a meme stamped with the current time.

        Returns:
            The auto-generated meme ID
        """
        cursor = self._conn.execute(
            """INSERT INTO memes (title, description, image_url, created_at)
               VALUES (?, ?, ?, ?)""",
            (title, description, image_url, isodatetime.now())
        )
        return cursor.lastrowid
