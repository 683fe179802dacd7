##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Used to store the application configuration.

Modules:
    config_filepaths.py: Constants for the locations of configuration and data files.
    configfile.py: Locates, loads, and applies defaults and environment overrides
        to the `app.yaml` configuration, and houses the `CONFIG` object.
"""
from copy import copy
from types import SimpleNamespace
from typing import Dict, List, Optional

from cadcam_db.utils import nested_dict_to_namespaces


SECTIONS: List[str] = ["store", "logging"]


class Config:  # pylint: disable=R0903
    """
    The Config class, meant to store all CADCAM DB config settings in one place.

    Attributes:
        store (Optional[SimpleNamespace]): The store backend settings (`backend`, `path`, `url`, ...).
        logging (Optional[SimpleNamespace]): The logging settings (`level`).

    Methods:
        __copy__: Creates a shallow copy of the Config instance.
        __str__: Returns a formatted string representation of the Config instance.
        load_app_into_namespaces: Converts the configuration dictionary into namespaces.
    """

    def __init__(self, app_dict: Dict):
        """
        Initializes the Config instance with configuration data from a dictionary.

        Args:
            app_dict: A dictionary containing configuration data for the application.
                Each known section is converted into a `SimpleNamespace`.
        """
        self.store: Optional[SimpleNamespace] = None
        self.logging: Optional[SimpleNamespace] = None
        self.load_app_into_namespaces(app_dict)

    def __copy__(self) -> "Config":
        """
        Creates a shallow copy of the Config instance.

        Returns:
            A new Config instance with copied sections.
        """
        cls = self.__class__
        result = cls.__new__(cls)
        result.__dict__.update({section: copy(self.__dict__[section]) for section in SECTIONS})
        return result

    def __str__(self) -> str:
        """
        Returns a formatted string representation of the Config instance.

        Returns:
            A string containing the values of every section.
        """
        formatted_str = "config:"
        for name in SECTIONS:
            attr = getattr(self, name)
            if attr is not None:
                joined_items = "\n".join(f"    {k}: {v!r}" for k, v in attr.__dict__.items())
                formatted_str += f"\n  {name}:\n{joined_items}"
            else:
                formatted_str += f"\n  {name}:\n    None"
        return formatted_str

    def load_app_into_namespaces(self, app_dict: Dict):
        """
        Converts the provided application dictionary into namespaces and assigns them
        to the Config instance's attributes.

        Args:
            app_dict: A dictionary containing configuration data for the application.
        """
        for section in SECTIONS:
            if app_dict.get(section) is not None:
                setattr(self, section, nested_dict_to_namespaces(app_dict[section]))
