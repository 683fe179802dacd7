##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
CLI module for reading resources.

The `resource` command reads one entity or a listing by URI and prints the
JSON result, or writes it to a file.
"""

import json
import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from cadcam_db.cli.commands.command_entry_point import CommandEntryPoint
from cadcam_db.cli.utils import open_operations, parse_key_value_args
from cadcam_db.utils import dump_to_json_file


LOG = logging.getLogger("cadcam_db")


class ResourceCommand(CommandEntryPoint):
    """
    Handles the `resource` CLI command.

    Methods:
        add_parser: Adds the `resource` command to the CLI parser.
        process_command: Reads the resource and outputs the result.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `resource` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to add the `resource` parser to.
        """
        resource: ArgumentParser = subparsers.add_parser(
            "resource",
            help="Read a resource, e.g. resource://drawings or resource://drawings/<id>.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        resource.add_argument("uri", type=str, help="The resource URI or URI template to read.")
        resource.add_argument(
            "--arg",
            action="append",
            dest="resource_args",
            default=None,
            metavar="KEY=VAL",
            help="A template argument, e.g. project_id=<id>. May be repeated.",
        )
        resource.add_argument(
            "-o", "--output", type=str, default=None, help="Write the JSON result to this file instead of stdout."
        )
        resource.set_defaults(func=self.process_command)

    def process_command(self, args: Namespace):
        """
        Read the resource and print or save the result.

        Args:
            args: Parsed CLI arguments.
        """
        resource_args = parse_key_value_args(args.resource_args)
        with open_operations(args) as registry:
            result = registry.read_resource(args.uri, resource_args)

        if args.output:
            dump_to_json_file(json.loads(result), args.output)
            LOG.info(f"Wrote {args.uri} to {args.output}.")
        else:
            print(result)
