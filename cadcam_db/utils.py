##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################

"""
Module for project-wide utility functions.
"""
import json
import logging
import os
import re
from copy import deepcopy
from types import SimpleNamespace
from typing import Any, Dict

import yaml
from filelock import FileLock


LOG = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def load_yaml(filepath: str) -> Dict:
    """
    Safely read a YAML file and return its contents.

    Args:
        filepath: The file path to the YAML file to be read.

    Returns:
        A dict representing the contents of the YAML file.
    """
    with open(filepath, "r") as _file:
        return yaml.safe_load(_file)


def verify_filepath(filepath: str) -> str:
    """
    Verify that the given file path is valid and return its absolute form.

    Args:
        filepath: The path of the file to verify.

    Returns:
        The verified absolute file path with expanded environment variables.

    Raises:
        ValueError: If the provided file path does not point to a valid file.
    """
    filepath = os.path.abspath(os.path.expandvars(os.path.expanduser(filepath)))
    if not os.path.isfile(filepath):
        raise ValueError(f"'{filepath}' is not a valid filepath")
    return filepath


def nested_dict_to_namespaces(dic: Dict) -> SimpleNamespace:
    """
    Convert a nested dictionary into a nested SimpleNamespace structure.

    Args:
        dic: The nested dictionary to be converted.

    Returns:
        A SimpleNamespace object representing the nested structure of the input dictionary.

    Raises:
        TypeError: If the input is not a dictionary.
    """

    def recurse(dic):
        if not isinstance(dic, dict):
            return dic
        for key, val in list(dic.items()):
            dic[key] = recurse(val)
        return SimpleNamespace(**dic)

    if not isinstance(dic, dict):
        raise TypeError(f"{dic} is not a dict")

    new_dic = deepcopy(dic)
    return recurse(new_dic)


def camel_to_snake(name: str) -> str:
    """
    Convert a camelCase or PascalCase name to snake_case.

    Hyphens are treated as word separators so that URI style names
    (`machine-config`) convert as well.

    Args:
        name: The name to convert (e.g. `organizationId`, `MachineConfig`, `maxRPM`).

    Returns:
        The snake_case version of `name` (e.g. `organization_id`, `machine_config`, `max_rpm`).
    """
    return _CAMEL_BOUNDARY.sub("_", name).replace("-", "_").lower()


def snake_to_camel(name: str) -> str:
    """
    Convert a snake_case name to camelCase.

    Args:
        name: The name to convert (e.g. `organization_id`).

    Returns:
        The camelCase version of `name` (e.g. `organizationId`).
    """
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def get_plural_of_entity(entity_type: str, split_delimiter: str = "_", join_delimiter: str = "-") -> str:
    """
    Pluralize an entity type name.

    Only the last word is pluralized, so `library_item` becomes `library-items`.

    Args:
        entity_type: The singular entity type (e.g. `machine_config`).
        split_delimiter: The delimiter between the words of `entity_type`.
        join_delimiter: The delimiter to join the words of the result with.

    Returns:
        The plural of `entity_type`.
    """
    words = entity_type.split(split_delimiter)
    last = words[-1]
    if last.endswith("y") and not last.endswith(("ay", "ey", "oy", "uy")):
        words[-1] = f"{last[:-1]}ies"
    elif last.endswith(("s", "x", "ch", "sh")):
        words[-1] = f"{last}es"
    else:
        words[-1] = f"{last}s"
    return join_delimiter.join(words)


def dump_to_json_file(data: Any, filepath: str):
    """
    Atomically write JSON-serializable data to a file.

    A lock file is created alongside the target and the data is written to a
    temporary file first, then moved into place.

    Args:
        data: The data to write.
        filepath: The path to the JSON file where the data will be written.

    Raises:
        ValueError: If the `filepath` is not provided.
    """
    if not filepath:
        raise ValueError("A valid file path must be provided.")

    filepath = os.path.abspath(os.path.expanduser(filepath))
    os.makedirs(os.path.dirname(filepath), exist_ok=True)

    lock_file = f"{filepath}.lock"
    with FileLock(lock_file):  # pylint: disable=abstract-class-instantiated
        temp_filepath = f"{filepath}.tmp"
        with open(temp_filepath, "w") as json_file:
            json.dump(data, json_file, indent=4)
        os.replace(temp_filepath, filepath)

    LOG.debug(f"Data successfully dumped to {filepath}.")
