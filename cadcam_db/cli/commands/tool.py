##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
CLI module for running write tools.

The `tool` command runs `create_<entity>`, `update_<entity>`, or
`delete_<entity>` with JSON arguments and prints the JSON result.
"""

import logging
from argparse import ArgumentParser, Namespace

from cadcam_db.cli.commands.command_entry_point import CommandEntryPoint
from cadcam_db.cli.utils import load_json_args, open_operations


LOG = logging.getLogger("cadcam_db")


class ToolCommand(CommandEntryPoint):
    """
    Handles the `tool` CLI command.

    Methods:
        add_parser: Adds the `tool` command to the CLI parser.
        process_command: Runs the tool and prints the result.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `tool` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to add the `tool` parser to.
        """
        tool: ArgumentParser = subparsers.add_parser(
            "tool", help="Run a write tool, e.g. create_drawing, update_drawing, delete_drawing."
        )
        tool.add_argument("name", type=str, help="The tool to run.")
        sources = tool.add_mutually_exclusive_group()
        sources.add_argument("--args", type=str, dest="tool_args", default=None, help="The tool arguments as JSON.")
        sources.add_argument(
            "--args-file", type=str, dest="tool_args_file", default=None, help="A file holding the JSON arguments."
        )
        tool.set_defaults(func=self.process_command)

    def process_command(self, args: Namespace):
        """
        Run the tool and print the result.

        Args:
            args: Parsed CLI arguments.
        """
        tool_args = load_json_args(args.tool_args, args.tool_args_file)
        with open_operations(args) as registry:
            result = registry.call_tool(args.name, tool_args)
        print(result)
