"""Turn a session into tmux commands and run them."""
import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .environ import Environment
from .errors import (
    EnvironmentSetFailed,
    FocusFailed,
    KeystrokeSendFailed,
    NoWindowsConfigured,
    SessionCreateFailed,
    TmuxgError,
    WindowCreateFailed,
)
from .models import Session

logger = logging.getLogger(__name__)


def target(session: str, index: int) -> str:
    """tmux address of a window by position."""
    return f"{session}:{index}"


@dataclass(frozen=True)
class CreateSession:
    """Start the detached session running window 0's command."""
    session: str
    command: str
    cwd: str = ""

    def args(self) -> List[str]:
        args = ["new-session", "-d", "-s", self.session]
        if self.cwd:
            args.extend(["-c", self.cwd])
        args.append(self.command)
        return args

    def error(self) -> TmuxgError:
        return SessionCreateFailed(f"failed to start tmux session {self.session!r}")


@dataclass(frozen=True)
class SetEnvironment:
    """Set a variable in the session environment."""
    session: str
    key: str
    value: str

    def args(self) -> List[str]:
        return ["set-environment", "-t", self.session, self.key, self.value]

    def error(self) -> TmuxgError:
        return EnvironmentSetFailed(self.key)


@dataclass(frozen=True)
class CreateWindow:
    """Create the window at a given index."""
    session: str
    index: int
    name: str
    command: str
    cwd: str = ""

    def args(self) -> List[str]:
        args = ["new-window", "-d", "-t", target(self.session, self.index)]
        if self.cwd:
            args.extend(["-c", self.cwd])
        args.append(self.command)
        return args

    def error(self) -> TmuxgError:
        return WindowCreateFailed(self.name)


@dataclass(frozen=True)
class SendKeys:
    """Type keystrokes into a window."""
    session: str
    index: int
    name: str
    keys: Tuple[str, ...]

    def args(self) -> List[str]:
        return ["send-keys", "-t", target(self.session, self.index), *self.keys]

    def error(self) -> TmuxgError:
        return KeystrokeSendFailed(self.name)


@dataclass(frozen=True)
class SelectWindow:
    """Give a window the initial focus."""
    session: str
    index: int

    def args(self) -> List[str]:
        return ["select-window", "-t", target(self.session, self.index)]

    def error(self) -> TmuxgError:
        return FocusFailed(f"failed to set window focus to {target(self.session, self.index)}")


@dataclass(frozen=True)
class Attach:
    """Hand the terminal over to the session."""
    session: str

    def args(self) -> List[str]:
        return ["attach", "-t", self.session]

    def error(self) -> Optional[TmuxgError]:
        return None


Operation = Union[CreateSession, SetEnvironment, CreateWindow, SendKeys, SelectWindow, Attach]


def plan_session(session: Session, env: Environment, environment: Optional[dict] = None) -> List[Operation]:
    """Build the ordered tmux operations that realize ``session``.

    Args:
        session: The loaded session
        env: Environment to expand commands and directories against
        environment: Expanded session variables to set in tmux, in order
            (defaults to expanding ``session.environment`` one by one against ``env``)

    Raises:
        NoWindowsConfigured: The session has no windows
    """
    if not session.windows:
        raise NoWindowsConfigured(session.name)

    if environment is None:
        environment = {k: env.expand(v) for k, v in session.environment.items()}

    name = session.name
    first = session.windows[0]
    ops: List[Operation] = [
        CreateSession(name, env.expand(first.command), env.expand(session.cwd)),
    ]

    for key, value in environment.items():
        ops.append(SetEnvironment(name, key, value))

    for i, window in enumerate(session.windows[1:], start=1):
        ops.append(CreateWindow(
            name,
            i,
            window.name,
            env.expand(window.command),
            env.expand(session.window_cwd(window)),
        ))

    for i, window in enumerate(session.windows):
        if window.keystrokes:
            ops.append(SendKeys(name, i, window.name, tuple(window.keystrokes)))

    ops.append(SelectWindow(name, session.focus_index()))
    ops.append(Attach(name))
    return ops


def materialize(ops: List[Operation], tmux) -> int:
    """Run operations in order through ``tmux``.

    Any failure aborts, except failing to set a session environment
    variable, which is logged and skipped.

    Returns:
        Exit code of the final attach, or 0 if the plan has none
    """
    exit_code = 0
    for op in ops:
        if isinstance(op, Attach):
            logger.info(f"Attaching to session {op.session!r}")
            exit_code = tmux.run(op.args()).returncode
            continue

        try:
            tmux.run(op.args()).check_returncode()
        except (OSError, subprocess.CalledProcessError) as e:
            error = op.error()
            if isinstance(op, SetEnvironment):
                logger.warning(f"{error}: {e}")
                continue
            raise error from e

    return exit_code
