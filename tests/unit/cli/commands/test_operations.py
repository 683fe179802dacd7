##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Tests for the `operations.py` file of the `cli/` folder.
"""

from _pytest.capture import CaptureFixture

from cadcam_db.cli.commands.operations import OperationsCommand
from tests.fixture_types import FixtureCallable


def test_operations_parser_defaults(create_parser: FixtureCallable):
    """
    Ensure the `operations` command sets its function and default table format.

    Args:
        create_parser: A function that creates a parser with a given command registered.
    """
    command = OperationsCommand()
    args = create_parser(command).parse_args(["operations"])

    assert args.func.__name__ == command.process_command.__name__
    assert args.tablefmt == "simple"


def test_operations_lists_tools_and_resources(create_parser: FixtureCallable, capsys: CaptureFixture):
    """
    Ensure every tool and resource template is printed.

    Args:
        create_parser: A function that creates a parser with a given command registered.
        capsys: PyTest capsys fixture.
    """
    command = OperationsCommand()
    args = create_parser(command).parse_args(["operations", "--tablefmt", "plain"])

    command.process_command(args)

    output = capsys.readouterr().out
    assert "create_drawing" in output
    assert "Updates an existing machine configuration" in output
    assert "delete_subscription" in output
    assert "resource://library-items/{library_item_id}" in output
    assert "organization_id" in output
