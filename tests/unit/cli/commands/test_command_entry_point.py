##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Tests for the `command_entry_point.py` file of the `cli/` folder.
"""

from argparse import ArgumentParser, Namespace

import pytest

from cadcam_db.cli.commands import ALL_COMMANDS
from cadcam_db.cli.commands.command_entry_point import CommandEntryPoint


class ConcreteCommand(CommandEntryPoint):
    """A minimal command used to exercise the base class."""

    def add_parser(self, subparsers: ArgumentParser):
        parser = subparsers.add_parser("concrete")
        parser.set_defaults(func=self.process_command)

    def process_command(self, args: Namespace):
        return "processed"


def test_cannot_instantiate_abstract_class():
    """
    The base class can't be instantiated without the abstract methods.
    """
    with pytest.raises(TypeError):
        CommandEntryPoint()  # pylint: disable=abstract-class-instantiated


def test_concrete_command():
    """
    A subclass that implements both methods can register and run.
    """
    command = ConcreteCommand()
    parser = ArgumentParser()
    command.add_parser(parser.add_subparsers(dest="main_command"))

    args = parser.parse_args(["concrete"])

    assert args.func(args) == "processed"


def test_all_commands_are_entry_points():
    """
    Every registered command implements the entry point interface.
    """
    assert ALL_COMMANDS
    assert all(isinstance(command, CommandEntryPoint) for command in ALL_COMMANDS)
