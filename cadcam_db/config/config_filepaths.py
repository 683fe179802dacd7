##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
This module stores constants representing file paths that will be needed for
CADCAM DB's configuration.
"""

import os


APP_FILENAME: str = "app.yaml"
USER_HOME: str = os.path.expanduser("~")
CADCAM_DB_HOME: str = os.path.join(USER_HOME, ".cadcam_db")
DEFAULT_SQLITE_PATH: str = os.path.join(CADCAM_DB_HOME, "cadcam_db.sqlite")
