##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
CADCAM DB CLI Commands Package.

Modules:
    command_entry_point: Defines the abstract base class `CommandEntryPoint` for all CLI commands.
    info: Implements the `info` command for displaying configuration and backend diagnostics.
    operations: Implements the `operations` command for listing tools and resource templates.
    resource: Implements the `resource` command for reading entities by URI.
    tool: Implements the `tool` command for running write operations.
"""

from cadcam_db.cli.commands.info import InfoCommand
from cadcam_db.cli.commands.operations import OperationsCommand
from cadcam_db.cli.commands.resource import ResourceCommand
from cadcam_db.cli.commands.tool import ToolCommand


ALL_COMMANDS = [
    InfoCommand(),
    OperationsCommand(),
    ResourceCommand(),
    ToolCommand(),
]
