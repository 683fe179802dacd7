##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Utility functions to support CADCAM DB CLI command handlers.

This module loads the configuration, opens the configured backend, and
parses `KEY=val` and JSON arguments given on the command line.
"""

import json
import logging
from argparse import Namespace
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from cadcam_db.backends.backend_factory import backend_factory
from cadcam_db.backends.store_backend import StoreBackend
from cadcam_db.config.configfile import get_backend_config, initialize_config
from cadcam_db.db_scripts.repository import RepositoryFacade
from cadcam_db.operations import OperationRegistry
from cadcam_db.utils import verify_filepath


LOG = logging.getLogger("cadcam_db")


def parse_key_value_args(arg_list: Optional[List[str]]) -> Dict[str, str]:
    """
    Parse a list of `KEY=val` strings into a dictionary.

    Args:
        arg_list: Strings in the format "KEY=val", e.g., ["project_id=p1"].

    Returns:
        A dictionary of the parsed pairs; empty if `arg_list` is None or empty.

    Raises:
        ValueError: If an entry has no '=' or an empty key.
    """
    result: Dict[str, str] = {}
    for arg in arg_list or []:
        key, sep, val = arg.partition("=")
        if not sep or not key:
            raise ValueError(f"Bad argument '{arg}'; expected the format KEY=val.")
        result[key] = val
    LOG.debug(f"Command line arguments = {result}")
    return result


def load_json_args(args_text: Optional[str] = None, args_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load tool arguments from JSON text or a JSON file.

    Args:
        args_text: JSON text of the arguments.
        args_file: Path to a file holding the JSON arguments.

    Returns:
        The decoded arguments; an empty dict if neither source is given.

    Raises:
        ValueError: If the JSON is invalid or isn't an object.
    """
    if args_file:
        with open(verify_filepath(args_file), "r") as json_file:
            args_text = json_file.read()
    if not args_text:
        return {}

    try:
        loaded = json.loads(args_text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Tool arguments are not valid JSON: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ValueError("Tool arguments must be a JSON object.")
    return loaded


def create_backend(args: Namespace) -> StoreBackend:
    """
    Load the configuration and create the configured backend.

    Args:
        args: Parsed CLI arguments; `args.config` may name a config file or directory.

    Returns:
        An open backend. The caller owns it and must close it.
    """
    config = initialize_config(getattr(args, "config", None))
    backend_config = get_backend_config(config)
    LOG.debug(f"Using the '{backend_config['name']}' backend.")
    return backend_factory.create(backend_config["name"], backend_config["kwargs"])


@contextmanager
def open_operations(args: Namespace) -> Iterator[OperationRegistry]:
    """
    Open the configured backend and yield an operation registry bound to it.

    The backend is closed when the `with` block exits.

    Args:
        args: Parsed CLI arguments.

    Yields:
        An `OperationRegistry` over a repository for the configured backend.
    """
    with create_backend(args) as backend:
        yield OperationRegistry(RepositoryFacade(backend))
