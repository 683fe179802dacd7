##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
CLI module for displaying configuration and backend information.
"""

import logging
from argparse import ArgumentParser, Namespace

from tabulate import tabulate

from cadcam_db import VERSION
from cadcam_db.cli.commands.command_entry_point import CommandEntryPoint
from cadcam_db.cli.utils import create_backend
from cadcam_db.config.configfile import find_config_file


LOG = logging.getLogger("cadcam_db")


class InfoCommand(CommandEntryPoint):
    """
    Handles `info` CLI command for viewing information about the configured store.

    Methods:
        add_parser: Adds the `info` command to the CLI parser.
        process_command: Prints the configuration and backend details.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `info` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to add the `info` parser to.
        """
        info: ArgumentParser = subparsers.add_parser(
            "info", help="Display the configuration and store backend in use. Useful for debugging."
        )
        info.set_defaults(func=self.process_command)

    def process_command(self, args: Namespace):
        """
        Print the configuration file, backend name, version, and connection string.

        Args:
            args: Parsed CLI arguments.
        """
        with create_backend(args) as backend:
            rows = [
                ["cadcam-db version", VERSION],
                ["config file", find_config_file(getattr(args, "config", None)) or "(defaults)"],
                ["backend", backend.get_name()],
                ["backend version", backend.get_version()],
                ["connection", backend.get_connection_string()],
            ]
        print(tabulate(rows, tablefmt="plain"))
