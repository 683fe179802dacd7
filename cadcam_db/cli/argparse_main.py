##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Main CLI parser setup for the CADCAM DB command-line interface.
"""

import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter

from cadcam_db import VERSION
from cadcam_db.cli.commands import ALL_COMMANDS


DEFAULT_LOG_LEVEL = None


class HelpParser(ArgumentParser):
    """
    This class overrides the error message of the argument parser to
    print the help message when an error happens.

    Methods:
        error: Override the error message of the `ArgumentParser` class.
    """

    def error(self, message: str):
        """
        Override the error message of the `ArgumentParser` class.

        Args:
            message: The error message to log.
        """
        sys.stderr.write(f"error: {message}\n")
        self.print_help()
        sys.exit(2)


def build_main_parser() -> ArgumentParser:
    """
    Set up the command-line argument parser for the CADCAM DB package.

    Returns:
        An `ArgumentParser` object with every command parser registered.
    """
    parser = HelpParser(
        prog="cadcam-db",
        description="Read and write CADCAM entities: projects, drawings, tools, toolpaths, and more.",
        formatter_class=RawDescriptionHelpFormatter,
        epilog="See cadcam-db <command> --help for more info",
    )
    parser.add_argument("-v", "--version", action="version", version=VERSION)
    parser.add_argument(
        "-lvl",
        "--level",
        type=str,
        default=DEFAULT_LOG_LEVEL,
        help="Set log level: DEBUG, INFO, WARNING, ERROR [Default: the configured level, or INFO]",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to an app.yaml file, or a directory holding one.",
    )
    subparsers = parser.add_subparsers(dest="subparsers", required=True)

    for command in ALL_COMMANDS:
        command.add_parser(subparsers)

    return parser
