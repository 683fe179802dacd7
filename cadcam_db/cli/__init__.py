##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
The `cli` package contains the command line interface of CADCAM DB.

Modules:
    argparse_main.py: Builds the top-level `cadcam-db` argument parser.
    utils.py: Configuration, backend, and argument helpers for the commands.
"""
