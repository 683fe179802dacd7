##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
The `operations` package exposes the repository as named write tools and
URI-addressed read resources.

Modules:
    definitions.py: Builds the tool definitions and resource templates of every entity kind.
    registry.py: Provides `OperationRegistry`, which dispatches calls to the repository.
"""

from cadcam_db.operations.registry import OperationRegistry


__all__ = ["OperationRegistry"]
