##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################

"""
CADCAM DB: entity storage for CAD/CAM design data.

This package exposes users, organizations, projects, drawings, components,
materials, tools, machine configurations, toolpaths, library items, and
subscriptions through a uniform set of read and write operations.
"""

import os


__version__ = "1.4.0"
VERSION = __version__
PATH_TO_PROJ = os.path.join(os.path.dirname(__file__), "")
