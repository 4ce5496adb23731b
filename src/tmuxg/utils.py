"""Utility functions for tmuxg."""
import logging
import os
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

APP_NAME = "tmuxg"


def get_config_dir(environ: Optional[Mapping[str, str]] = None, create: bool = True) -> Path:
    """
    Resolve the per-user tmuxg configuration directory.

    Args:
        environ: Environment to read XDG_CONFIG_HOME and HOME from (default os.environ)
        create: Create the directory if it does not exist

    Returns:
        Path to the tmuxg configuration directory

    Example:
        >>> get_config_dir({"XDG_CONFIG_HOME": "/etc/xdg"}, create=False)
        PosixPath('/etc/xdg/tmuxg')
    """
    if environ is None:
        environ = os.environ

    config_home = environ.get("XDG_CONFIG_HOME", "")
    if not config_home:
        config_home = os.path.join(environ.get("HOME", ""), ".config")

    config_dir = Path(config_home) / APP_NAME
    if create and not config_dir.is_dir():
        logger.debug(f"Creating config directory {config_dir}")
        config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def session_file_path(name: str, environ: Optional[Mapping[str, str]] = None, create: bool = True) -> Path:
    """Path of the session document for ``name`` in the config directory."""
    return get_config_dir(environ, create=create) / f"{name}.yaml"
