##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
The `db_scripts` package contains the entity model and persistence-mapping layer:
entity dataclasses, schema validation, JSON field encoding, partial update
construction, error translation, and the repository facade that ties them together.
"""
