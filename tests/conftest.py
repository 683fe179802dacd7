##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
This module contains pytest fixtures to be used throughout the entire test suite.

Fixtures live in the `tests/fixtures/` directory and are loaded here as plugins.
"""
import logging
import os
from glob import glob

import pytest

from cadcam_db.config import configfile
from tests.fixture_types import FixtureModification


TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
fixture_glob = os.path.join(TESTS_DIR, "fixtures", "**", "*.py")
pytest_plugins = [
    "tests." + os.path.relpath(fixture_file, TESTS_DIR).replace(os.sep, ".")[: -len(".py")]
    for fixture_file in glob(fixture_glob, recursive=True)
    if not fixture_file.endswith("__init__.py")
]


@pytest.fixture(autouse=True)
def reset_global_config() -> FixtureModification:
    """
    Restore the module-level `CONFIG` object after every test so tests
    that initialize the configuration can't leak into each other.
    """
    original = configfile.CONFIG
    yield
    configfile.CONFIG = original


@pytest.fixture(autouse=True)
def clear_cadcam_env(monkeypatch: pytest.MonkeyPatch) -> FixtureModification:
    """
    Remove `CADCAM_DB_*` environment variables so a developer's shell settings
    don't change test outcomes.

    Args:
        monkeypatch: Built-in fixture for modifying the environment.
    """
    for env_var in configfile.ENV_OVERRIDES:
        monkeypatch.delenv(env_var, raising=False)


@pytest.fixture(autouse=True)
def restore_package_logger() -> FixtureModification:
    """
    Undo handler and level changes made to the `cadcam_db` logger by tests of the CLI.
    """
    logger = logging.getLogger("cadcam_db")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
