##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
The `abstracts` package contains abstract base classes shared across CADCAM DB.

Modules:
    factory.py: Provides `CadcamBaseFactory`, a reusable registry and plugin
        loader for pluggable components such as store backends.
"""

from cadcam_db.abstracts.factory import CadcamBaseFactory


__all__ = ["CadcamBaseFactory"]
