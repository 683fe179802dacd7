##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Tests for the `sqlite_store_base.py` module.
"""
from typing import Tuple
from unittest.mock import MagicMock

import pytest

from cadcam_db.backends.sqlite.sqlite_connection import SQLiteConnection
from cadcam_db.backends.sqlite.sqlite_store_base import SQLiteStoreBase
from cadcam_db.db_scripts.data_models import ToolModel, UserModel
from tests.fixture_types import FixtureTuple


@pytest.fixture
def tool_store(mock_sqlite_connection: FixtureTuple) -> Tuple[SQLiteStoreBase, MagicMock, MagicMock]:
    """
    A tool store wired to a mock connection.

    Args:
        mock_sqlite_connection: A tuple of (connection owner, connection, cursor) mocks.

    Returns:
        A tuple of (store, connection, cursor).
    """
    owner, conn, cursor = mock_sqlite_connection
    return SQLiteStoreBase(owner, "tool", ToolModel), conn, cursor


class TestSQLiteStoreBaseSQL:
    """Tests for the SQL the store generates."""

    def test_table_name(self, tool_store: Tuple):
        """
        The store key is the table name.

        Args:
            tool_store: A tuple of (store, connection, cursor).
        """
        store, _, _ = tool_store
        assert store.table_name == "tool"
        assert store.model_class is ToolModel

    def test_create_table(self, tool_store: Tuple):
        """
        Column types follow the field types and identifiers are quoted.

        Args:
            tool_store: A tuple of (store, connection, cursor).
        """
        store, conn, _ = tool_store

        store.create_table_if_not_exists()

        query = conn.execute.call_args[0][0]
        assert query.startswith('CREATE TABLE IF NOT EXISTS "tool" (')
        assert '"id" TEXT PRIMARY KEY' in query
        assert '"diameter" REAL' in query
        assert '"is_public" INTEGER' in query
        assert '"name" TEXT' in query
        assert '"updated_at" TEXT' in query

    def test_unique_columns(self, mock_sqlite_connection: FixtureTuple):
        """
        Unique fields get a UNIQUE column constraint.

        Args:
            mock_sqlite_connection: A tuple of (connection owner, connection, cursor) mocks.
        """
        owner, conn, _ = mock_sqlite_connection

        SQLiteStoreBase(owner, "user", UserModel).create_table_if_not_exists()

        assert '"email" TEXT UNIQUE' in conn.execute.call_args[0][0]

    def test_build_where_clause_empty(self, tool_store: Tuple):
        """
        No filters means no WHERE clause.

        Args:
            tool_store: A tuple of (store, connection, cursor).
        """
        store, _, _ = tool_store
        assert store._build_where_clause_and_params({}) == ("", [])  # pylint: disable=protected-access

    def test_build_where_clause(self, tool_store: Tuple):
        """
        Equality, IN, and IS NULL conditions are joined with AND.

        Args:
            tool_store: A tuple of (store, connection, cursor).
        """
        store, _, _ = tool_store

        clause, params = store._build_where_clause_and_params(  # pylint: disable=protected-access
            {"organization_id": "o1", "type": ["drill", "endmill"], "owner_id": None}
        )

        assert clause == 'WHERE "organization_id" = ? AND "type" IN (?, ?) AND "owner_id" IS NULL'
        assert params == ["o1", "drill", "endmill"]

    def test_build_where_clause_empty_list(self, tool_store: Tuple):
        """
        An empty list matches nothing instead of producing invalid SQL.

        Args:
            tool_store: A tuple of (store, connection, cursor).
        """
        store, _, _ = tool_store
        clause, params = store._build_where_clause_and_params({"type": []})  # pylint: disable=protected-access
        assert clause == "WHERE 1 = 0"
        assert params == []

    def test_retrieve_not_found(self, tool_store: Tuple):
        """
        A missing row returns None.

        Args:
            tool_store: A tuple of (store, connection, cursor).
        """
        store, _, cursor = tool_store
        cursor.fetchone.return_value = None

        assert store.retrieve("missing") is None

    def test_update_missing_row(self, tool_store: Tuple):
        """
        An update that touches no rows returns None without reading back.

        Args:
            tool_store: A tuple of (store, connection, cursor).
        """
        store, conn, cursor = tool_store
        cursor.rowcount = 0

        assert store.update("missing", {"name": "drill"}) is None
        query, params = conn.execute.call_args[0]
        assert query.startswith('UPDATE "tool" SET "name" = :name, "updated_at" = :updated_at')
        assert params["identifier"] == "missing"

    def test_delete(self, tool_store: Tuple):
        """
        Delete reports whether a row was removed.

        Args:
            tool_store: A tuple of (store, connection, cursor).
        """
        store, conn, cursor = tool_store

        cursor.rowcount = 1
        assert store.delete("t1") is True
        cursor.rowcount = 0
        assert store.delete("t1") is False
        assert conn.execute.call_args[0][0] == 'DELETE FROM "tool" WHERE id = :identifier'


class TestSQLiteStoreBaseRoundTrip:
    """Tests against a real in-memory database."""

    @pytest.fixture
    def store(self) -> SQLiteStoreBase:
        """
        A tool store over a real in-memory database.

        Yields:
            A `SQLiteStoreBase` with its table created.
        """
        connection = SQLiteConnection()
        store = SQLiteStoreBase(connection, "tool", ToolModel)
        store.create_table_if_not_exists()
        yield store
        connection.close()

    def test_insert_and_retrieve(self, store: SQLiteStoreBase):
        """
        Inserted values read back with their types.

        Args:
            store: A tool store over a real in-memory database.
        """
        created = store.insert({"name": "drill", "type": "drill", "diameter": 3, "material": "HSS", "is_public": True})

        fetched = store.retrieve(created.id)

        assert fetched == created
        assert fetched.diameter == 3.0
        assert fetched.is_public is True

    def test_retrieve_all_filtered(self, store: SQLiteStoreBase):
        """
        Filtering happens in SQL.

        Args:
            store: A tool store over a real in-memory database.
        """
        first = store.insert({"name": "a", "type": "drill", "diameter": 1, "material": "HSS", "organization_id": "o1"})
        store.insert({"name": "b", "type": "drill", "diameter": 2, "material": "HSS", "organization_id": "o2"})

        assert [tool.id for tool in store.retrieve_all_filtered({"organization_id": "o1"})] == [first.id]
        assert len(store.retrieve_all()) == 2

    def test_update_refreshes_updated_at(self, store: SQLiteStoreBase):
        """
        Updates change the values and move `updated_at` forward.

        Args:
            store: A tool store over a real in-memory database.
        """
        created = store.insert({"name": "a", "type": "drill", "diameter": 1, "material": "HSS"})

        updated = store.update(created.id, {"notes": "sharpened"})

        assert updated.notes == "sharpened"
        assert updated.created_at == created.created_at
        assert updated.updated_at >= created.updated_at
