##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
SQLite connection handling for the CADCAM DB application.

This module defines the `SQLiteConnection` class, which opens one configured
SQLite connection and hands it out through a context manager. The connection
stays open between uses and is closed once by whoever owns the backend.
"""

import logging
import sqlite3
import sys
from pathlib import Path
from types import TracebackType
from typing import Optional, Type


LOG = logging.getLogger(__name__)

IN_MEMORY = ":memory:"


class SQLiteConnection:
    """
    Owner of a single SQLite connection, usable as a context manager.

    The connection is created on first use with:
    - WAL mode for better concurrency (file databases only)
    - Dictionary-style row access via `sqlite3.Row`
    - Autocommit, so every statement is committed as it runs

    Attributes:
        db_path (str): The path to the SQLite file, or `:memory:`.
        conn (sqlite3.Connection): The open connection, or None before first use and after `close`.

    Methods:
        open: Open the connection if it isn't already.
        close: Close the connection.
    """

    def __init__(self, db_path: str = IN_MEMORY):
        self.db_path: str = db_path
        self.conn: Optional[sqlite3.Connection] = None

    def open(self) -> sqlite3.Connection:
        """
        Open the connection if it isn't already.

        Returns:
            The open sqlite connection.
        """
        if self.conn is not None:
            return self.conn

        if self.db_path != IN_MEMORY:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        connection_kwargs = {"check_same_thread": False}
        if sys.version_info < (3, 12):  # Autocommit wasn't added until python 3.12
            connection_kwargs["isolation_level"] = None
        else:
            connection_kwargs["autocommit"] = True

        LOG.debug(f"Opening SQLite connection to '{self.db_path}'.")
        self.conn = sqlite3.connect(self.db_path, **connection_kwargs)
        if self.db_path != IN_MEMORY:
            self.conn.execute("PRAGMA journal_mode=WAL")

        # This enables name-based access to columns
        self.conn.row_factory = sqlite3.Row
        return self.conn

    def close(self):
        """
        Close the connection. Safe to call more than once.
        """
        if self.conn is not None:
            LOG.debug(f"Closing SQLite connection to '{self.db_path}'.")
            self.conn.close()
            self.conn = None

    def __enter__(self) -> sqlite3.Connection:
        """
        Get the open connection for the duration of a `with` block.

        Returns:
            A sqlite connection.
        """
        return self.open()

    def __exit__(self, exc_type: Type[Exception], exc_value: Exception, traceback: TracebackType):
        """
        Leave the connection open; it is closed by `close`.

        Args:
            exc_type: The exception type raised, if any.
            exc_value: The exception instance raised, if any.
            traceback: The traceback object, if an exception was raised.
        """
