##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
SQLite backend implementation for the CADCAM DB application.

This module defines the `SQLiteBackend` class, a `StoreBackend` that keeps
every entity kind in its own table of a single SQLite database. With the
`FilterSupportMixin` it filters listings inside the database.
"""

import logging
import os

from cadcam_db.backends.filter_support_mixin import FilterSupportMixin
from cadcam_db.backends.sqlite.sqlite_connection import IN_MEMORY, SQLiteConnection
from cadcam_db.backends.sqlite.sqlite_store_base import SQLiteStoreBase
from cadcam_db.backends.store_backend import StoreBackend
from cadcam_db.db_scripts.data_models import ALL_MODELS


LOG = logging.getLogger(__name__)


class SQLiteBackend(StoreBackend, FilterSupportMixin):
    """
    A SQLite-based implementation of the `StoreBackend` interface.

    Attributes:
        backend_name (str): The name of the backend (e.g., "sqlite").
        connection (SQLiteConnection): The connection shared by every store.

    Methods:
        get_version: Query SQLite for the current version.
        get_connection_string: Retrieve the file path of the database.
        flush_database: Remove every entry by dropping and recreating the tables.
        close: Close the connection.
        retrieve_all_filtered: Retrieve all entities of a kind that match column filters.
    """

    def __init__(self, backend_name: str = "sqlite", path: str = IN_MEMORY):
        """
        Open the database and make sure every table exists.

        Args:
            backend_name: The name of the backend.
            path: The SQLite file to use, or `:memory:`.
        """
        if path != IN_MEMORY:
            path = os.path.abspath(os.path.expanduser(path))
        self.connection: SQLiteConnection = SQLiteConnection(path)

        stores = {
            model.entity_kind: SQLiteStoreBase(self.connection, model.entity_kind, model) for model in ALL_MODELS
        }
        super().__init__(backend_name, stores)

        self._initialize_schema()

    def _initialize_schema(self):
        """Initialize the database schema by creating all necessary tables."""
        for store in self.stores.values():
            store.create_table_if_not_exists()

    def get_version(self) -> str:
        """
        Query SQLite for the current version.

        Returns:
            The SQLite version string.
        """
        with self.connection as conn:
            cursor = conn.execute("SELECT sqlite_version()")
            return cursor.fetchone()[0]

    def get_connection_string(self) -> str:
        """
        Get the path of the SQLite database.

        Returns:
            The database file path, or `:memory:`.
        """
        return self.connection.db_path

    def flush_database(self):
        """
        Remove every entry in the SQLite database by dropping and recreating tables.
        """
        with self.connection as conn:
            cursor = conn.execute("SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'")
            tables = [row[0] for row in cursor.fetchall()]

            for table in tables:
                conn.execute(f"DROP TABLE IF EXISTS \"{table}\"")

        LOG.info(f"Dropped {len(tables)} tables from SQLite.")
        self._initialize_schema()

    def close(self):
        """
        Close the SQLite connection.
        """
        self.connection.close()
