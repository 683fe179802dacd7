##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Redis backend package for CADCAM DB.

Modules:
    redis_backend.py: Defines `RedisBackend`, the Redis implementation of `StoreBackend`.
    redis_store_base.py: Defines `RedisStoreBase`, the hash-per-entity store.
"""
