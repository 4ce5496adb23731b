"""Locate and decode session documents."""
import logging
from pathlib import Path
from typing import Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from .errors import ConfigNotFound, ConfigParseError, ConfigReadError
from .models import Session
from .utils import session_file_path

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_COMMAND = "bash"


def locate_session(name: str, environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Resolve a session name or path to a session document.

    An existing regular file is used as is. Anything else is looked up as
    ``<name>.yaml`` in the tmuxg config directory, which is created if needed.

    Raises:
        ConfigNotFound: Neither the path nor the config directory entry exists
        ConfigReadError: The path or config directory could not be inspected
    """
    direct = Path(name)
    try:
        if direct.is_file():
            return direct
    except OSError as e:
        raise ConfigReadError(f"failed to open session file {name!r}") from e

    try:
        path = session_file_path(name, environ)
    except OSError as e:
        raise ConfigReadError(f"failed to create config directory for session {name!r}") from e

    try:
        if path.is_file():
            logger.debug(f"Session {name!r} resolved to {path}")
            return path
    except OSError as e:
        raise ConfigReadError(f"failed to resolve session {name!r} file {str(path)!r}") from e

    raise ConfigNotFound(name, path)


def parse_session(text: str, source: str = "<string>", default_command: str = DEFAULT_WINDOW_COMMAND) -> Session:
    """Decode a session document, filling window command defaults."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"failed to parse session file {source!r}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigParseError(f"session file {source!r} must contain a mapping, not {type(data).__name__}")

    try:
        session = Session.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(f"invalid session file {source!r}") from e

    return session.with_default_command(default_command)


def load_session(path: Union[str, Path], default_command: str = DEFAULT_WINDOW_COMMAND) -> Session:
    """
    Read and decode the session document at ``path``.

    A document without a ``name`` takes the file name (without extension).

    Raises:
        ConfigReadError: The file could not be read
        ConfigParseError: The file is not a valid session document
    """
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as e:
        raise ConfigReadError(f"failed to read session file {str(path)!r}") from e

    session = parse_session(text, source=str(path), default_command=default_command)
    if not session.name:
        session = session.model_copy(update={"name": path.stem})
    logger.debug(f"Loaded session {session.name!r} with {len(session.windows)} windows from {path}")
    return session
