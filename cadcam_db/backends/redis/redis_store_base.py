##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Base class for Redis-backed data stores in CADCAM DB.

Each entity is one Redis hash stored under `<entity_kind>:<id>`. Fields whose
value is None are not written to the hash, so they read back as missing.
Unique fields are enforced with an index hash per field,
`unique:<entity_kind>:<field>`, which maps each taken value to the entity id.

See also:
    - cadcam_db.backends.store_base: Base class
    - cadcam_db.db_scripts.data_models: Data model definitions
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Type

from redis import Redis

from cadcam_db.backends.store_base import StoreBase, T, utc_now
from cadcam_db.backends.utils import deserialize_entity, serialize_values
from cadcam_db.exceptions import UniqueConstraintError
from cadcam_db.utils import get_plural_of_entity


LOG = logging.getLogger(__name__)


class RedisStoreBase(StoreBase[T], Generic[T]):
    """
    Store that keeps one entity kind as Redis hashes.

    Attributes:
        client (Redis): The Redis client used for database operations.
        key (str): The prefix key used for Redis entries.
        model_class (Type[T]): The model class used for deserialization.

    Methods:
        insert: Create a new entity.
        retrieve: Retrieve an entity from the database by ID.
        retrieve_all: Query the database for all entities of this type.
        update: Apply changes to an existing entity.
        delete: Delete an entity from the database by ID.
    """

    def __init__(self, client: Redis, key: str, model_class: Type[T]):
        """
        Initialize the Redis store with a Redis client.

        Args:
            client: A Redis client instance used to interact with the Redis database.
            key: The prefix key used for Redis entries.
            model_class: The model class used for deserialization.
        """
        super().__init__(key, model_class)
        self.client: Redis = client
        self.unique_columns: List[str] = [spec.attribute for spec in model_class.get_field_specs() if spec.unique]

    def _get_full_key(self, entity_id: str) -> str:
        """
        Get the full Redis key for an entity.

        Args:
            entity_id: The entity ID.

        Returns:
            The full Redis key.
        """
        return f"{self.key}:{entity_id}"

    def _get_index_key(self, column: str) -> str:
        return f"unique:{self.key}:{column}"

    def _check_unique(self, values: Dict[str, Any], entity_id: str):
        """
        Make sure no other entity holds the unique values in `values`.

        Args:
            values: Serialized values keyed by column name.
            entity_id: The id of the entity the values are for.

        Raises:
            UniqueConstraintError: If another entity already holds one of the values.
        """
        for column in self.unique_columns:
            value = values.get(column)
            if value is None:
                continue
            owner = self.client.hget(self._get_index_key(column), value)
            if owner is not None and owner != entity_id:
                raise UniqueConstraintError(self.key, column, value)

    def _write_hash(self, entity_key: str, serialized_data: Dict[str, Any]):
        """Write non-None values to the hash and remove fields set to None."""
        present = {column: value for column, value in serialized_data.items() if value is not None}
        cleared = [column for column, value in serialized_data.items() if value is None]
        if present:
            self.client.hset(entity_key, mapping=present)
        if cleared:
            self.client.hdel(entity_key, *cleared)

    def insert(self, values: Dict[str, Any]) -> T:
        """
        Create a new entity in the Redis database.

        Args:
            values: The entity's field values keyed by column name.

        Returns:
            The created entity.

        Raises:
            UniqueConstraintError: If a unique field would be duplicated.
        """
        row = {**values, **self._new_system_fields()}
        serialized_data = serialize_values(self.model_class, row)
        self._check_unique(serialized_data, row["id"])

        LOG.debug(f"Creating a {self.key} entry in Redis...")
        self._write_hash(self._get_full_key(row["id"]), serialized_data)
        for column in self.unique_columns:
            if serialized_data.get(column) is not None:
                self.client.hset(self._get_index_key(column), serialized_data[column], row["id"])
        LOG.debug(f"Successfully created a {self.key} with id '{row['id']}' in Redis.")

        return deserialize_entity(serialized_data, self.model_class)

    def retrieve(self, identifier: str) -> Optional[T]:
        """
        Retrieve an entity from the Redis database by ID.

        Args:
            identifier: The ID of the entity to retrieve.

        Returns:
            The entity if found, None otherwise.
        """
        LOG.debug(f"Retrieving identifier {identifier} in RedisStoreBase.")
        return self._retrieve_by_key(self._get_full_key(identifier))

    def _retrieve_by_key(self, entity_key: str) -> Optional[T]:
        if not self.client.exists(entity_key):
            return None

        data_from_redis = self.client.hgetall(entity_key)
        return deserialize_entity(data_from_redis, self.model_class)

    def retrieve_all(self) -> List[T]:
        """
        Query the Redis database for all entities of this type, oldest first.

        Returns:
            A list of entities.
        """
        entity_type = get_plural_of_entity(self.key, split_delimiter="_", join_delimiter=" ")
        LOG.debug(f"Fetching all {entity_type} from Redis...")

        all_entities = []
        # Loop through all entities using scan_iter for better efficiency with large datasets
        for key in self.client.scan_iter(match=f"{self.key}:*"):
            entity = self._retrieve_by_key(key)
            if entity is None:
                LOG.warning(f"{self.key.capitalize()} with key '{key}' disappeared while listing.")
                continue
            all_entities.append(entity)

        all_entities.sort(key=lambda entity: (entity.created_at is None, entity.created_at))
        LOG.debug(f"Retrieved {len(all_entities)} {entity_type} from Redis.")
        return all_entities

    def update(self, identifier: str, changes: Dict[str, Any]) -> Optional[T]:
        """
        Apply changes to an existing entity and refresh its `updated_at` timestamp.

        Fields set to None are removed from the hash.

        Args:
            identifier: The ID of the entity to update.
            changes: The new values keyed by column name.

        Returns:
            The updated entity, or None if no entity has this ID.

        Raises:
            UniqueConstraintError: If a unique field would be duplicated.
        """
        existing = self.retrieve(identifier)
        if existing is None:
            LOG.debug(f"No {self.key} with id '{identifier}' to update.")
            return None

        LOG.debug(f"Attempting to update {self.key} with id '{existing.id}'...")
        serialized_data = serialize_values(self.model_class, {**changes, "updated_at": utc_now()})
        serialized_data.pop("id", None)
        self._check_unique(serialized_data, existing.id)

        self._write_hash(self._get_full_key(existing.id), serialized_data)
        for column in self.unique_columns:
            if column not in serialized_data:
                continue
            old_value = getattr(existing, column)
            if old_value is not None:
                self.client.hdel(self._get_index_key(column), old_value)
            if serialized_data[column] is not None:
                self.client.hset(self._get_index_key(column), serialized_data[column], existing.id)
        LOG.debug(f"Successfully updated {self.key} with id '{existing.id}'.")

        return self.retrieve(existing.id)

    def delete(self, identifier: str) -> bool:
        """
        Delete an entity from the Redis database by ID.

        Args:
            identifier: The ID of the entity to delete.

        Returns:
            True if the entity was deleted, False if no entity has this ID.
        """
        LOG.debug(f"Attempting to delete {self.key} with id '{identifier}' from Redis...")
        entity = self.retrieve(identifier)
        if entity is None:
            return False

        for column in self.unique_columns:
            value = getattr(entity, column)
            if value is not None:
                self.client.hdel(self._get_index_key(column), value)

        self.client.delete(self._get_full_key(entity.id))
        LOG.debug(f"Successfully deleted {self.key} '{identifier}' from Redis.")
        return True
