##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
It's hard to type hint pytest fixtures in a way that makes it clear
that the variable being used is a fixture. This module will create
aliases for these fixtures in order to make it easier to track what's
happening.

The types here will be defined as such:
- `FixtureCallable`: A fixture that returns a function
- `FixtureDict`: A fixture that returns a dictionary
- `FixtureModification`: A fixture that modifies something but never actually
                         returns/yields a value to be used in the test.
- `FixtureRedis`: A fixture that returns a Redis client
- `FixtureStr`: A fixture that returns a string
- `FixtureTuple`: A fixture that returns a tuple
"""

from collections.abc import Callable
from typing import Annotated, Any, Dict, List, Tuple, TypeVar

import pytest
from redis import Redis

from cadcam_db.backends.sqlite.sqlite_backend import SQLiteBackend
from cadcam_db.db_scripts.repository import RepositoryFacade


K = TypeVar("K")
V = TypeVar("V")

FixtureCallable = Annotated[Callable, pytest.fixture]
FixtureDict = Annotated[Dict[K, V], pytest.fixture]
FixtureList = Annotated[List[K], pytest.fixture]
FixtureModification = Annotated[Any, pytest.fixture]
FixtureRedis = Annotated[Redis, pytest.fixture]
FixtureRepository = Annotated[RepositoryFacade, pytest.fixture]
FixtureSQLiteBackend = Annotated[SQLiteBackend, pytest.fixture]
FixtureStr = Annotated[str, pytest.fixture]
FixtureTuple = Annotated[Tuple[K, V], pytest.fixture]
