##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
SQLite backend package for CADCAM DB.

Modules:
    sqlite_backend.py: Defines `SQLiteBackend`, the SQLite implementation of `StoreBackend`.
    sqlite_connection.py: Provides `SQLiteConnection`, the owner of the shared connection.
    sqlite_store_base.py: Defines `SQLiteStoreBase`, the table-per-entity store.
"""
