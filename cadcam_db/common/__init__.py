##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################

"""
The `common` package provides shared definitions used across CADCAM DB.

Modules:
    enums.py: Defines enumerations for error kinds, schema modes, and field types.
"""
