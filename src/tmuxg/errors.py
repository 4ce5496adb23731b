"""Errors raised while loading and materializing sessions."""
from typing import List


class TmuxgError(Exception):
    """Base class for all tmuxg failures."""


class ConfigNotFound(TmuxgError):
    """No session document exists for the requested name or path."""

    def __init__(self, name: str, path=None):
        self.name = name
        self.path = path
        if path is None:
            super().__init__(f"session {name!r} not found")
        else:
            super().__init__(f"session {name!r} not found at {str(path)!r}")


class ConfigReadError(TmuxgError):
    """The session document exists but could not be read."""


class ConfigParseError(TmuxgError):
    """The session document could not be decoded."""


class NoWindowsConfigured(TmuxgError):
    """The session declares no windows."""

    def __init__(self, session: str):
        self.session = session
        super().__init__(f"no windows configured for session {session!r}")


class SessionCreateFailed(TmuxgError):
    """tmux refused to start the session."""


class EnvironmentSetFailed(TmuxgError):
    """tmux refused to set a session environment variable."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"failed to set environment variable {key!r}")


class WindowCreateFailed(TmuxgError):
    """tmux refused to create a window."""

    def __init__(self, window: str):
        self.window = window
        super().__init__(f"failed to create window {window!r}")


class KeystrokeSendFailed(TmuxgError):
    """tmux refused to send keystrokes to a window."""

    def __init__(self, window: str):
        self.window = window
        super().__init__(f"failed to send keystrokes to window {window!r}")


class FocusFailed(TmuxgError):
    """tmux refused to select the focus window."""


class SetupScriptFailed(TmuxgError):
    """The session setup script could not be run or exited non-zero."""


class EditorFailed(TmuxgError):
    """The editor exited with an error."""


class SettingsError(TmuxgError):
    """The tmuxg settings file or a TMUXG_* override is invalid."""


def format_error_chain(exc: BaseException) -> str:
    """Render an exception and its causes as ``msg: cause: cause``."""
    parts: List[str] = []
    seen = set()
    current = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        message = str(current) or type(current).__name__
        parts.append(message)
        current = current.__cause__
    return ": ".join(parts)
