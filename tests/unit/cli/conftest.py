##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Fixtures for files in this `cli/` test directory.
"""

import os
from argparse import ArgumentParser

import pytest
import yaml

from cadcam_db.cli.commands.command_entry_point import CommandEntryPoint
from tests.fixture_types import FixtureCallable, FixtureStr


@pytest.fixture
def app_config_dir(tmp_path) -> FixtureStr:
    """
    Create a directory holding an `app.yaml` that points the SQLite backend
    at a database file in the same temporary directory.

    Args:
        tmp_path: A built-in fixture that provides a temporary directory.

    Returns:
        The path to the directory holding the config file.
    """
    config = {
        "store": {"backend": "sqlite", "path": os.path.join(str(tmp_path), "cadcam_db.sqlite")},
        "logging": {"level": "WARNING"},
    }
    with open(os.path.join(str(tmp_path), "app.yaml"), "w") as app_file:
        yaml.dump(config, app_file)
    return str(tmp_path)


@pytest.fixture
def create_parser() -> FixtureCallable:
    """
    A fixture to help create a parser for any command.

    Returns:
        A function that creates a parser.
    """

    def _create_parser(cmd: CommandEntryPoint) -> ArgumentParser:
        """
        Returns an `ArgumentParser` configured with the `cmd` command.

        Returns:
            Parser with the `cmd` command registered.
        """
        parser = ArgumentParser()
        parser.add_argument("--config", type=str, default=None)
        subparsers = parser.add_subparsers(dest="main_command")
        cmd.add_parser(subparsers)
        return parser

    return _create_parser
