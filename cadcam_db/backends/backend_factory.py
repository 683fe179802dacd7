##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Backend factory for selecting and instantiating store backends in CADCAM DB.

This module defines the `CadcamBackendFactory` class, which maps backend names
and aliases to `StoreBackend` implementations. Packages can contribute more
backends through the `cadcam_db.backends` entry point group.
"""

from typing import Any

from cadcam_db.abstracts import CadcamBaseFactory
from cadcam_db.backends.redis.redis_backend import RedisBackend
from cadcam_db.backends.sqlite.sqlite_backend import SQLiteBackend
from cadcam_db.backends.store_backend import StoreBackend
from cadcam_db.exceptions import BackendNotSupportedError


class CadcamBackendFactory(CadcamBaseFactory):
    """
    Factory class for managing and instantiating supported CADCAM DB backends.

    Attributes:
        _registry (Dict[str, StoreBackend]): Maps canonical backend names to backend classes.
        _aliases (Dict[str, str]): Maps alternate names to canonical backend names.

    Methods:
        register: Register a new backend class and optional aliases.
        list_available: Return a list of supported backend names.
        create: Instantiate a backend class by name or alias.
        get_component_info: Return metadata about a registered backend.
    """

    def _register_builtins(self):
        """
        Register built-in backend implementations.
        """
        self.register("redis", RedisBackend, aliases=["rediss"])
        self.register("sqlite", SQLiteBackend)

    def _validate_component(self, component_class: Any):
        """
        Ensure registered component is a subclass of StoreBackend.

        Args:
            component_class: The class to validate.

        Raises:
            TypeError: If the component does not subclass StoreBackend.
        """
        if not isinstance(component_class, type) or not issubclass(component_class, StoreBackend):
            raise TypeError(f"{component_class} must inherit from StoreBackend")

    def _entry_point_group(self) -> str:
        """
        Entry point group used for discovering backend plugins.

        Returns:
            The entry point namespace for CADCAM DB backend plugins.
        """
        return "cadcam_db.backends"

    def _raise_component_error_class(self, msg: str):
        """
        Raise an appropriate exception for unsupported components.

        Args:
            msg: The message to add to the error being raised.

        Raises:
            BackendNotSupportedError: Always.
        """
        raise BackendNotSupportedError(msg)


backend_factory = CadcamBackendFactory()
