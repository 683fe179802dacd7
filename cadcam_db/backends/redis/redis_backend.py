##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Redis backend implementation for the CADCAM DB application.

This module provides `RedisBackend`, a `StoreBackend` that keeps each entity
kind as Redis hashes. Redis offers no column filtering, so the repository
filters listings from this backend in memory.
"""

import logging
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from redis import Redis

from cadcam_db.backends.redis.redis_store_base import RedisStoreBase
from cadcam_db.backends.store_backend import StoreBackend
from cadcam_db.db_scripts.data_models import ALL_MODELS


LOG = logging.getLogger("cadcam_db")

DEFAULT_REDIS_URL = "redis://localhost:6379/0"


class RedisBackend(StoreBackend):
    """
    A Redis-based implementation of the `StoreBackend` interface.

    Attributes:
        backend_name (str): The name of the backend (e.g., "redis").
        url (str): The Redis URL the client connects to.
        client (Redis): The Redis client used for database operations.

    Methods:
        get_version: Query Redis for the current version.
        get_connection_string: Retrieve the Redis URL without its password.
        flush_database: Remove every entry in the Redis database.
        close: Close the Redis client.
    """

    def __init__(
        self,
        backend_name: str = "redis",
        url: str = DEFAULT_REDIS_URL,
        cert_reqs: Optional[str] = None,
        client: Optional[Redis] = None,
    ):
        """
        Create the Redis client and one store per entity kind.

        Args:
            backend_name: The name of the backend (e.g., "redis" or "rediss").
            url: The Redis URL to connect to.
            cert_reqs: The SSL certificate requirement for `rediss` URLs.
            client: An existing client to use instead of creating one from `url`.
        """
        self.url: str = url
        if client is None:
            redis_config = {"url": url, "decode_responses": True}
            if url.startswith("rediss://"):
                redis_config["ssl_cert_reqs"] = cert_reqs or "required"
            client = Redis.from_url(**redis_config)
        self.client: Redis = client

        stores = {model.entity_kind: RedisStoreBase(self.client, model.entity_kind, model) for model in ALL_MODELS}
        super().__init__(backend_name, stores)

    def get_version(self) -> str:
        """
        Query the Redis backend for the current version.

        Returns:
            A string representing the current version of Redis.
        """
        client_info = self.client.info()
        return client_info.get("redis_version", "N/A")

    def get_connection_string(self) -> str:
        """
        Get the Redis URL with any password masked.

        Returns:
            The Redis URL the backend is connected to.
        """
        parts = urlsplit(self.url)
        if parts.password is None:
            return self.url
        netloc = parts.netloc.replace(f":{parts.password}@", ":******@")
        return urlunsplit(parts._replace(netloc=netloc))

    def flush_database(self):
        """
        Remove everything stored in Redis.
        """
        self.client.flushdb()

    def close(self):
        """
        Close the Redis client.
        """
        self.client.close()
