##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
This module locates and loads the application configuration file (`app.yaml`),
fills in default settings, and applies environment variable overrides.

It houses the `CONFIG` object that bootstrap code hands settings out of.
Nothing below the CLI reads `CONFIG`; backends receive their settings explicitly.
"""
import logging
import os
from typing import Any, Dict, Optional

from cadcam_db.config import Config
from cadcam_db.config.config_filepaths import APP_FILENAME, CADCAM_DB_HOME, DEFAULT_SQLITE_PATH
from cadcam_db.utils import load_yaml


LOG: logging.Logger = logging.getLogger(__name__)

CONFIG: Optional[Config] = None

DEFAULT_REDIS_URL: str = "redis://localhost:6379/0"

# Environment variable -> (section, key)
ENV_OVERRIDES: Dict[str, tuple] = {
    "CADCAM_DB_BACKEND": ("store", "backend"),
    "CADCAM_DB_PATH": ("store", "path"),
    "CADCAM_DB_REDIS_URL": ("store", "url"),
    "CADCAM_DB_LOG_LEVEL": ("logging", "level"),
}


def get_default_config() -> Dict:
    """
    Creates the default configuration used when no `app.yaml` exists.

    Returns:
        A configuration dictionary with every default value.
    """
    return {
        "store": {"backend": "sqlite", "path": DEFAULT_SQLITE_PATH, "url": DEFAULT_REDIS_URL},
        "logging": {"level": "INFO"},
    }


def find_config_file(path: Optional[str] = None) -> Optional[str]:
    """
    Locate the application configuration file (`app.yaml`).

    If `path` is given it is used as-is when it is a file, or searched for
    `app.yaml` when it is a directory. Otherwise the current working directory
    is checked first, then the CADCAM DB home directory.

    Args:
        path: An explicit config file or a directory to look in.

    Returns:
        The full path to the configuration file if found, otherwise `None`.
    """
    if path is not None:
        path = os.path.expanduser(path)
        if os.path.isfile(path):
            return path
        app_path = os.path.join(path, APP_FILENAME)
        return app_path if os.path.isfile(app_path) else None

    for directory in (os.getcwd(), CADCAM_DB_HOME):
        app_path = os.path.join(directory, APP_FILENAME)
        if os.path.isfile(app_path):
            return app_path
    return None


def load_defaults(config: Dict):
    """
    Fill in default values for every setting the configuration leaves out.

    Args:
        config: The configuration dictionary to update in place.
    """
    for section, defaults in get_default_config().items():
        if not isinstance(config.get(section), dict):
            config[section] = {}
        for key, val in defaults.items():
            config[section].setdefault(key, val)


def apply_env_overrides(config: Dict, environ: Optional[Dict[str, str]] = None):
    """
    Override configuration values from `CADCAM_DB_*` environment variables.

    Args:
        config: The configuration dictionary to update in place.
        environ: The environment to read. Defaults to `os.environ`.
    """
    environ = os.environ if environ is None else environ
    for env_var, (section, key) in ENV_OVERRIDES.items():
        if environ.get(env_var):
            LOG.debug(f"Overriding {section}.{key} from {env_var}.")
            config.setdefault(section, {})[key] = environ[env_var]


def get_config(path: Optional[str] = None) -> Dict:
    """
    Load the configuration file, if there is one, and apply defaults and environment overrides.

    Args:
        path: An explicit config file or a directory to look in.

    Returns:
        A dictionary containing all the configuration data.

    Raises:
        ValueError: If `path` was given but no configuration file could be found there.
    """
    filepath = find_config_file(path)
    if filepath is None:
        if path is not None:
            raise ValueError(f"Cannot find a CADCAM DB config file at '{path}'.")
        LOG.debug("No app config file found; using the default configuration.")
        config = {}
    else:
        LOG.debug(f"Reading app config from file {filepath}")
        config = load_yaml(filepath) or {}
        if not isinstance(config, dict):
            raise ValueError(f"The config file '{filepath}' must contain a mapping at the top level.")

    load_defaults(config)
    apply_env_overrides(config)
    return config


def initialize_config(path: Optional[str] = None) -> Config:
    """
    Load the configuration and store it in the module-level `CONFIG`.

    Args:
        path: An explicit config file or a directory to look in.

    Returns:
        The loaded `Config` object.
    """
    global CONFIG  # pylint: disable=global-statement
    CONFIG = Config(get_config(path))
    return CONFIG


def get_backend_config(config: Config) -> Dict[str, Any]:
    """
    Build the settings handed to the backend factory.

    Args:
        config: The loaded configuration.

    Returns:
        A dict with the backend name under `name` and the keyword arguments for
        the backend's constructor under `kwargs`.
    """
    backend = str(config.store.backend).lower()
    kwargs: Dict[str, Any] = {"backend_name": backend}
    if backend == "sqlite":
        kwargs["path"] = config.store.path
    elif backend in ("redis", "rediss"):
        kwargs["url"] = config.store.url
        cert_reqs = getattr(config.store, "cert_reqs", None)
        if cert_reqs:
            kwargs["cert_reqs"] = cert_reqs
    else:
        # Plugin backends receive every store setting except the backend selector
        kwargs.update({k: v for k, v in vars(config.store).items() if k != "backend"})
    return {"name": backend, "kwargs": kwargs}
