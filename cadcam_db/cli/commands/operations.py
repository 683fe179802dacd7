##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
CLI module for listing the operations CADCAM DB exposes.

The `operations` command prints every write tool and read resource template.
It needs no configuration or store.
"""

import logging
from argparse import ArgumentParser, Namespace

from tabulate import tabulate

from cadcam_db.cli.commands.command_entry_point import CommandEntryPoint
from cadcam_db.operations.definitions import build_all_definitions


LOG = logging.getLogger("cadcam_db")


class OperationsCommand(CommandEntryPoint):
    """
    Handles the `operations` CLI command.

    Methods:
        add_parser: Adds the `operations` command to the CLI parser.
        process_command: Prints the tables of tools and resources.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `operations` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to add the `operations` parser to.
        """
        operations: ArgumentParser = subparsers.add_parser(
            "operations", help="List the available tools and resource templates."
        )
        operations.add_argument(
            "--tablefmt", type=str, default="simple", help="Table format passed to tabulate. [Default: %(default)s]"
        )
        operations.set_defaults(func=self.process_command)

    def process_command(self, args: Namespace):
        """
        Print the tools and resource templates as tables.

        Args:
            args: Parsed CLI arguments.
        """
        tools, resources = build_all_definitions()

        tool_rows = [[tool.name, tool.description] for tool in tools]
        resource_rows = [
            [resource.uri_template, resource.name, ", ".join(arg.name for arg in resource.arguments)]
            for resource in resources
        ]

        print(tabulate(tool_rows, headers=["Tool", "Description"], tablefmt=args.tablefmt))
        print()
        print(tabulate(resource_rows, headers=["Resource", "Name", "Arguments"], tablefmt=args.tablefmt))
