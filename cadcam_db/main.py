##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Main entry point into CADCAM DB's codebase.
"""

import logging
import sys
import traceback
from typing import List, Optional

from cadcam_db.cli.argparse_main import build_main_parser
from cadcam_db.common.enums import ReturnCode
from cadcam_db.config.configfile import get_config
from cadcam_db.log_formatter import setup_logging


LOG = logging.getLogger("cadcam_db")


def main(argv: Optional[List[str]] = None):
    """
    Entry point for the CADCAM DB command-line interface (CLI) operations.

    Sets up the argument parser and logging, then runs the selected command.
    Any failure is logged and the process exits with a non-zero code.

    Args:
        argv: The arguments to parse. Defaults to `sys.argv[1:]`.
    """
    argv = sys.argv[1:] if argv is None else argv
    parser = build_main_parser()
    if not argv:
        parser.print_help(sys.stdout)
        sys.exit(ReturnCode.ERROR)
    args = parser.parse_args(argv)

    try:
        log_level = args.level or get_config(args.config)["logging"]["level"]
        setup_logging(logger=LOG, log_level=str(log_level).upper(), colors=True)
        args.func(args)
    # Top of the program stack: report every failure as an exit code
    except Exception as excpt:  # pylint: disable=broad-except
        LOG.debug(traceback.format_exc())
        LOG.error(str(excpt))
        sys.exit(ReturnCode.ERROR)

    sys.exit(ReturnCode.OK)


if __name__ == "__main__":
    main()
