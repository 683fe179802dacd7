##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Abstract base class for store backends in the CADCAM DB application.

This module defines `StoreBackend`, the interface every backend implementation
offers to the repository layer. A backend groups one store per entity kind
and routes each call to the store of the requested kind.

Usage:
    This base class is not meant to be instantiated directly. Instead, it should be subclassed
    by backend-specific implementations such as `RedisBackend` or `SQLiteBackend`.
"""

import logging
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any, Dict, List, Optional, Type

from cadcam_db.backends.store_base import StoreBase
from cadcam_db.db_scripts.data_models import BaseDataModel


LOG = logging.getLogger(__name__)


class StoreBackend(ABC):
    """
    Abstract base class for a store backend.

    Backends own the store handle (connection or client). They are opened once,
    handed to the repository, and closed once with `close` or by leaving a
    `with` block.

    Attributes:
        backend_name (str): The name of the backend (e.g., "redis", "sqlite").
        stores (Dict[str, StoreBase]): One store per entity kind, keyed by snake_case kind.

    Methods:
        get_name: Retrieve the name of the backend.
        get_version: Query the backend for the current version.
        get_connection_string: Retrieve the connection string used to connect to the backend.
        flush_database: Remove every entry in the database.
        close: Release the store handle.
        insert: Create an entity of a given kind.
        retrieve: Retrieve an entity of a given kind by ID.
        retrieve_all: Retrieve all entities of a given kind.
        update: Apply changes to an entity of a given kind.
        delete: Delete an entity of a given kind by ID.
    """

    def __init__(self, backend_name: str, stores: Dict[str, StoreBase]):
        """
        Initialize the `StoreBackend` instance.

        Args:
            backend_name: The name of the backend (e.g., "redis").
            stores: One store per entity kind.
        """
        self.backend_name: str = backend_name
        self.stores: Dict[str, StoreBase] = stores

    def get_name(self) -> str:
        """
        Get the name of the backend.

        Returns:
            The name of the backend (e.g. redis).
        """
        return self.backend_name

    @abstractmethod
    def get_version(self) -> str:
        """
        Query the backend for the current version.

        Returns:
            A string representing the current version of the backend.
        """
        raise NotImplementedError("Subclasses of `StoreBackend` must implement a `get_version` method.")

    @abstractmethod
    def get_connection_string(self) -> str:
        """
        Get the connection string for the backend, without secrets.

        Returns:
            A string representing the connection to the backend.
        """
        raise NotImplementedError("Subclasses of `StoreBackend` must implement a `get_connection_string` method.")

    @abstractmethod
    def flush_database(self):
        """
        Remove everything stored in the database.
        """
        raise NotImplementedError("Subclasses of `StoreBackend` must implement a `flush_database` method.")

    @abstractmethod
    def close(self):
        """
        Release the store handle. Safe to call more than once.
        """
        raise NotImplementedError("Subclasses of `StoreBackend` must implement a `close` method.")

    def __enter__(self) -> "StoreBackend":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ):
        self.close()

    def _get_store_by_type(self, store_type: str) -> StoreBase:
        """
        Get the appropriate store based on the store type.

        Args:
            store_type: The snake_case entity kind.

        Returns:
            The corresponding store.

        Raises:
            ValueError: If the `store_type` is invalid.
        """
        if store_type not in self.stores:
            raise ValueError(f"Invalid store type '{store_type}'.")
        return self.stores[store_type]

    def insert(self, store_type: str, values: Dict[str, Any]) -> BaseDataModel:
        """
        Create an entity in the store for `store_type`.

        Args:
            store_type: The snake_case entity kind.
            values: The entity's field values keyed by column name.

        Returns:
            The created entity.
        """
        return self._get_store_by_type(store_type).insert(values)

    def retrieve(self, entity_identifier: str, store_type: str) -> Optional[BaseDataModel]:
        """
        Retrieve an entity from the store for `store_type`.

        Args:
            entity_identifier: The ID of the entity.
            store_type: The snake_case entity kind.

        Returns:
            The entity, or None if it doesn't exist.
        """
        LOG.debug(f"Retrieving '{entity_identifier}' from store '{store_type}'.")
        return self._get_store_by_type(store_type).retrieve(entity_identifier)

    def retrieve_all(self, store_type: str) -> List[BaseDataModel]:
        """
        Retrieve all entities from the store for `store_type`.

        Args:
            store_type: The snake_case entity kind.

        Returns:
            A list of entities.
        """
        return self._get_store_by_type(store_type).retrieve_all()

    def update(self, entity_identifier: str, store_type: str, changes: Dict[str, Any]) -> Optional[BaseDataModel]:
        """
        Apply changes to an entity in the store for `store_type`.

        Args:
            entity_identifier: The ID of the entity.
            store_type: The snake_case entity kind.
            changes: The new values keyed by column name.

        Returns:
            The updated entity, or None if it doesn't exist.
        """
        return self._get_store_by_type(store_type).update(entity_identifier, changes)

    def delete(self, entity_identifier: str, store_type: str) -> bool:
        """
        Delete an entity from the store for `store_type`.

        Args:
            entity_identifier: The ID of the entity.
            store_type: The snake_case entity kind.

        Returns:
            True if the entity was deleted, False if it doesn't exist.
        """
        return self._get_store_by_type(store_type).delete(entity_identifier)
