"""Database module for the Meme API.

This module provides the Core API for database operations.
Core encapsulates a SQLite connection and exposes per-table operations.

ARCHITECTURE:
- Core owns its connection
- atomic=True: Core is a context manager; commits on success, rolls back on
  error, and closes the connection on exit
- atomic=False: autocommit connection shared for the rest of the request via
  flask.g and closed on app context teardown

USAGE:

    # Reads (one connection per request):
    core = get_core()
    row = core.meme.get_by_id(meme_id)

    # Writes that must commit together:
    with get_core(atomic=True) as core:
        user_id = core.user.create(username, password_hash)

The database path is taken from the current Flask app's DATABASE_PATH unless
passed explicitly, so code running outside a request (seeding, tests) can
still build a Core.
"""

import logging
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from flask import current_app, g

from ..exceptions import DatabaseError
from ..schema import SCHEMA_PATH

if TYPE_CHECKING:
    from .meme import MemeOperations
    from .user import UserOperations

logger = logging.getLogger(__name__)


class Core:
    """
    Database Core with table operations.

    Maintains its own connection and transaction state.
    Provides access to user and meme operations through properties.
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager.
        """
        self._conn = connection
        self._atomic = atomic
        self._user_ops = None
        self._meme_ops = None

    @property
    def user(self) -> "UserOperations":
        """User credential operations (lazy-loaded and cached)."""
        if self._user_ops is None:
            from .user import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    @property
    def meme(self) -> "MemeOperations":
        """Meme record operations (lazy-loaded and cached)."""
        if self._meme_ops is None:
            from .meme import MemeOperations
            self._meme_ops = MemeOperations(self._conn)
        return self._meme_ops

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()

    def __enter__(self) -> "Core":
        """Enter context manager for atomic transaction.

        Raises:
            RuntimeError: If Core was not created with atomic=True
        """
        if not self._atomic:
            raise RuntimeError(
                "Core must be created with atomic=True for context manager use. "
                "Use: with db.get_core(atomic=True) as core:"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back the transaction."""
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self._conn.close()


def _create_connection(database_path: str, autocommit: bool = False) -> sqlite3.Connection:
    """Create a fresh database connection.

    Returns:
        SQLite connection with row_factory set to sqlite3.Row
        and foreign keys enabled.
    """
    db_path = Path(database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    if autocommit:
        conn.isolation_level = None
    return conn


def _resolve_path(database_path: str | None) -> str:
    if database_path is not None:
        return database_path
    return current_app.config["DATABASE_PATH"]


def get_core(atomic: bool = False, database_path: str | None = None) -> Core:
    """
    Get a database Core instance.

    Args:
        atomic: If True, returns a new Core that MUST be used as context manager.
                If False (default), returns the request's autocommit Core,
                creating it on first use.
        database_path: Override for the app's DATABASE_PATH.

    Returns:
        Core instance with user/meme operations
    """
    path = _resolve_path(database_path)
    if atomic:
        return Core(_create_connection(path), atomic=True)

    if database_path is not None:
        return Core(_create_connection(path, autocommit=True))

    if "core" not in g:
        g.core = Core(_create_connection(path, autocommit=True))
    return g.core


def close_core(e=None):
    """
    Close the request's Core at the end of the app context.

    Registered with Flask's teardown_appcontext in main.py.
    """
    core = g.pop("core", None)
    if core is not None:
        core.close()


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

def init_db(database_path: str) -> None:
    """Initialize database by running schema.sql if not already initialized.

    Raises:
        DatabaseError: If the schema cannot be applied
    """
    db_path = Path(database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    try:
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            # Database already initialized, skip
            return

        conn.executescript(SCHEMA_PATH.read_text())
        conn.commit()
        logger.info(f"Applied schema to {db_path}")
    except sqlite3.Error as e:
        raise DatabaseError(f"Failed to apply schema: {e}", {"path": str(db_path)}) from e
    finally:
        conn.close()
