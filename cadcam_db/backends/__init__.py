##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
The `backends` package contains the store implementations that persist
CADCAM DB entities.

Subpackages:
    - `redis/`: Redis-backed stores, one hash per entity.
    - `sqlite/`: SQLite-backed stores, one table per entity kind.

Modules:
    backend_factory.py: Maps backend names to implementations.
    filter_support_mixin.py: Adds in-store filtering to backends that support it.
    store_backend.py: Defines `StoreBackend`, the interface every backend offers.
    store_base.py: Defines `StoreBase`, the interface of a single-entity store.
    utils.py: Conversion between entity values and stored values.
"""
