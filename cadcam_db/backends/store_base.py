##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
This module defines the abstract base class for all data store implementations in CADCAM DB.

A store persists the entities of a single kind. Values handed to a store are
keyed by column name and are already in store form: flexible JSON fields are
encoded text. The store owns the system fields (`id`, `created_at`, `updated_at`).
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from cadcam_db.db_scripts.data_models import BaseDataModel


T = TypeVar("T", bound=BaseDataModel)


def utc_now() -> datetime:
    """Get the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class StoreBase(ABC, Generic[T]):
    """
    Base class for all stores supported in CADCAM DB.

    Attributes:
        key (str): The table name or key prefix the entities are stored under.
        model_class (Type[T]): The model class used for deserialization.

    Methods:
        create_table_if_not_exists: Prepare the store's storage, if it needs any.
        insert: Create a new entity.
        retrieve: Retrieve an entity by ID.
        retrieve_all: Retrieve all entities of this type.
        update: Apply changes to an existing entity.
        delete: Delete an entity by ID.
    """

    def __init__(self, key: str, model_class: Type[T]):
        self.key: str = key
        self.model_class: Type[T] = model_class

    def create_table_if_not_exists(self):
        """
        Prepare the storage for this entity type. Stores with no schema need nothing.
        """

    @staticmethod
    def _new_system_fields() -> Dict[str, Any]:
        """
        Generate the id and timestamps for a new entity.

        Returns:
            A dict with `id`, `created_at`, and `updated_at`.
        """
        now = utc_now()
        return {"id": str(uuid.uuid4()), "created_at": now, "updated_at": now}

    @abstractmethod
    def insert(self, values: Dict[str, Any]) -> T:
        """
        Create a new entity with a generated id and timestamps.

        Args:
            values: The entity's field values keyed by column name.

        Returns:
            The created entity, as stored.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement an `insert` method.")

    @abstractmethod
    def retrieve(self, identifier: str) -> Optional[T]:
        """
        Retrieve an entity by ID.

        Args:
            identifier: The ID of the entity to retrieve.

        Returns:
            The entity if found, None otherwise.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `retrieve` method.")

    @abstractmethod
    def retrieve_all(self) -> List[T]:
        """
        Query the store for all entities of this type.

        Returns:
            A list of entities.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `retrieve_all` method.")

    @abstractmethod
    def update(self, identifier: str, changes: Dict[str, Any]) -> Optional[T]:
        """
        Apply changes to an existing entity and refresh its `updated_at` timestamp.

        Args:
            identifier: The ID of the entity to update.
            changes: The new values keyed by column name.

        Returns:
            The updated entity, or None if no entity has this ID.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement an `update` method.")

    @abstractmethod
    def delete(self, identifier: str) -> bool:
        """
        Delete an entity by ID.

        Args:
            identifier: The ID of the entity to delete.

        Returns:
            True if an entity was deleted, False if no entity has this ID.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `delete` method.")
