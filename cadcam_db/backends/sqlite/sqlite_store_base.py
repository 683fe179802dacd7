##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
SQLite-based generic store implementation for CADCAM DB entities.

This module defines `SQLiteStoreBase`, a store that keeps one entity kind in
one SQLite table. The table's columns are derived from the model's field specs.
Relations are plain columns; no foreign keys are declared.

See also:
    - cadcam_db.backends.store_base: Base class
    - cadcam_db.db_scripts.data_models: Data model definitions
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Tuple, Type

from cadcam_db.backends.sqlite.sqlite_connection import SQLiteConnection
from cadcam_db.backends.store_base import StoreBase, T, utc_now
from cadcam_db.backends.utils import deserialize_entity, serialize_values
from cadcam_db.common.enums import FieldType
from cadcam_db.utils import get_plural_of_entity


LOG = logging.getLogger(__name__)

_SQLITE_TYPES = {
    FieldType.NUMBER: "REAL",
    FieldType.BOOLEAN: "INTEGER",  # SQLite uses 0 and 1 for booleans
}


class SQLiteStoreBase(StoreBase[T], Generic[T]):
    """
    Store that keeps one entity kind in a SQLite table.

    Attributes:
        connection (SQLiteConnection): The shared connection owner.
        key (str): The table name used for SQLite entries.
        model_class (Type[T]): The model class used for deserialization.

    Methods:
        create_table_if_not_exists: Create the table if it doesn't exist.
        insert: Create a new entity.
        retrieve: Retrieve an entity from the database by ID.
        retrieve_all: Query the database for all entities of this type.
        retrieve_all_filtered: Query the database for entities matching column filters.
        update: Apply changes to an existing entity.
        delete: Delete an entity from the database by ID.
    """

    def __init__(self, connection: SQLiteConnection, table_name: str, model_class: Type[T]):
        """
        Initialize the SQLite store.

        Args:
            connection: The connection owner shared by every store of a backend.
            table_name: The table name used for SQLite entries.
            model_class: The model class used for deserialization.
        """
        super().__init__(table_name, model_class)
        self.connection: SQLiteConnection = connection

    @property
    def table_name(self) -> str:
        """The table the entities are stored in."""
        return self.key

    def _column_definitions(self) -> List[str]:
        field_defs = ['"id" TEXT PRIMARY KEY']
        for spec in self.model_class.get_field_specs():
            col_def = f"\"{spec.attribute}\" {_SQLITE_TYPES.get(spec.field_type, 'TEXT')}"
            if spec.unique:
                col_def += " UNIQUE"
            field_defs.append(col_def)
        field_defs.extend(['"created_at" TEXT', '"updated_at" TEXT'])
        return field_defs

    def create_table_if_not_exists(self):
        """
        Create the table if it doesn't exist.
        """
        field_defs_str = ", ".join(self._column_definitions())
        with self.connection as conn:
            conn.execute(f"CREATE TABLE IF NOT EXISTS \"{self.table_name}\" ({field_defs_str});")

    def insert(self, values: Dict[str, Any]) -> T:
        """
        Create a new entity in the SQLite database.

        Args:
            values: The entity's field values keyed by column name.

        Returns:
            The created entity.

        Raises:
            sqlite3.IntegrityError: If a unique column would be duplicated.
        """
        row = {**values, **self._new_system_fields()}
        serialized_data = serialize_values(self.model_class, row)
        columns_str = ", ".join(f"\"{column}\"" for column in serialized_data)
        placeholders_str = ", ".join(f":{name}" for name in serialized_data)

        LOG.debug(f"Creating a {self.table_name} entry in SQLite...")
        with self.connection as conn:
            query = f"INSERT INTO \"{self.table_name}\" ({columns_str}) VALUES ({placeholders_str})"
            conn.execute(query, serialized_data)
        LOG.debug(f"Successfully created a {self.table_name} with id '{row['id']}' in SQLite.")

        return deserialize_entity(serialized_data, self.model_class)

    def retrieve(self, identifier: str) -> Optional[T]:
        """
        Retrieve an entity from the SQLite database by ID.

        Args:
            identifier: The ID of the entity to retrieve.

        Returns:
            The entity if found, None otherwise.
        """
        LOG.debug(f"Retrieving identifier {identifier} in SQLiteStoreBase.")
        with self.connection as conn:
            query = f"SELECT * FROM \"{self.table_name}\" WHERE id = :identifier"
            cursor = conn.execute(query, {"identifier": identifier})
            row = cursor.fetchone()

        if row is None:
            return None
        return deserialize_entity(dict(row), self.model_class)

    def _build_where_clause_and_params(self, filters: Dict[str, Any]) -> Tuple[str, List[Any]]:
        """
        Build the SQL WHERE clause and associated parameter list from a filters dictionary.

        Args:
            filters: Dictionary where keys are column names and values are either
                single values (for equality) or lists (for IN clauses).

        Returns:
            A tuple of (where_clause: str, params: List[Any])
        """
        if not filters:
            return "", []

        conditions = []
        params = []
        for column, value in filters.items():
            if isinstance(value, (list, tuple)):
                if not value:
                    # Avoid generating invalid SQL like `IN ()`
                    conditions.append("1 = 0")
                else:
                    conditions.append(f"\"{column}\" IN ({', '.join('?' for _ in value)})")
                    params.extend(value)
            elif value is None:
                conditions.append(f"\"{column}\" IS NULL")
            else:
                conditions.append(f"\"{column}\" = ?")
                params.append(value)

        return "WHERE " + " AND ".join(conditions), params

    def _retrieve_by_query(self, filters: Optional[Dict[str, Any]] = None) -> List[T]:
        """
        Query the SQLite database for entities with optional filters, in table order.

        Args:
            filters: Optional dictionary of column filters.

        Returns:
            A list of matching entities.
        """
        entity_type = get_plural_of_entity(self.table_name, split_delimiter="_", join_delimiter=" ")
        log_action = "filtered" if filters else "all"
        LOG.debug(f"Fetching {log_action} {entity_type} from SQLite{f' with filters: {filters}' if filters else ''}...")

        where_clause, params = self._build_where_clause_and_params(filters)
        query = f"SELECT * FROM \"{self.table_name}\" {where_clause}".strip()
        LOG.debug(f"SQLite query: {query}")
        LOG.debug(f"SQLite params: {params}")

        with self.connection as conn:
            cursor = conn.execute(query, params)
            entities = [deserialize_entity(dict(row), self.model_class) for row in cursor.fetchall()]

        LOG.debug(f"Retrieved {len(entities)} {entity_type} from SQLite ({log_action}).")
        return entities

    def retrieve_all(self) -> List[T]:
        """
        Query the SQLite database for all entities of this type.

        Returns:
            A list of entities.
        """
        return self._retrieve_by_query()

    def retrieve_all_filtered(self, filters: Dict[str, Any]) -> List[T]:
        """
        Query the SQLite database for all entities of this type that match the given filters.

        Args:
            filters: A dictionary where keys are column names and values are the values to match.

        Returns:
            A list of filtered entities.
        """
        return self._retrieve_by_query(filters=filters)

    def update(self, identifier: str, changes: Dict[str, Any]) -> Optional[T]:
        """
        Apply changes to an existing entity and refresh its `updated_at` timestamp.

        Args:
            identifier: The ID of the entity to update.
            changes: The new values keyed by column name.

        Returns:
            The updated entity, or None if no entity has this ID.

        Raises:
            sqlite3.IntegrityError: If a unique column would be duplicated.
        """
        LOG.debug(f"Attempting to update {self.table_name} with id '{identifier}'...")
        serialized_data = serialize_values(self.model_class, {**changes, "updated_at": utc_now()})
        serialized_data.pop("id", None)
        set_str = ", ".join(f"\"{column}\" = :{column}" for column in serialized_data)

        with self.connection as conn:
            cursor = conn.execute(
                f"UPDATE \"{self.table_name}\" SET {set_str} WHERE id = :identifier",
                {**serialized_data, "identifier": identifier},
            )
            updated = cursor.rowcount

        if not updated:
            LOG.debug(f"No {self.table_name} with id '{identifier}' to update.")
            return None

        LOG.debug(f"Successfully updated {self.table_name} with id '{identifier}'.")
        return self.retrieve(identifier)

    def delete(self, identifier: str) -> bool:
        """
        Delete an entity from the SQLite database by ID.

        Args:
            identifier: The ID of the entity to delete.

        Returns:
            True if a row was deleted, False if no entity has this ID.
        """
        LOG.debug(f"Attempting to delete {self.table_name} with id '{identifier}' from SQLite...")
        with self.connection as conn:
            query = f"DELETE FROM \"{self.table_name}\" WHERE id = :identifier"
            cursor = conn.execute(query, {"identifier": identifier})
            deleted = cursor.rowcount

        if not deleted:
            LOG.debug(f"No rows were deleted for {self.table_name} with id '{identifier}'.")
            return False

        LOG.debug(f"Successfully deleted {self.table_name} '{identifier}' from SQLite.")
        return True
