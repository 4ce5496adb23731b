"""Create and edit session documents."""
import logging
import shlex
import subprocess
from pathlib import Path
from typing import Optional

from . import proc
from .environ import Environment
from .errors import EditorFailed, TmuxgError
from .loader import load_session
from .models import Session

logger = logging.getLogger(__name__)

SESSION_TEMPLATE = """
# Name of the session. Probably don't mess with this.
name: {name}

# Environment variables set for the tmux session.
environment:
  GOPATH: ${{HOME}}/go/{name}

# Current working directory for the tmux session. May use environment variables
# declared above.
cwd: ${{GOPATH}}/src/github.com/{user}/{project}

# Script to run the first time this session starts, or when specifically
# invoked with --setup. Try to make this script idempotent.
setup-script: |
    #!/bin/bash
    mkdir -p ${{GOPATH}}
    go get -d github.com/{user}/{project}/...

# Windows to create in the tmux session and what to run in each.
windows:
  - name: editor
    command: vim
    keystrokes:
      - Enter
  - name: shell
focus: editor
"""


def render_template(name: str, user: str, project: str) -> str:
    """Session document skeleton for a new session."""
    return SESSION_TEMPLATE.format(name=name, user=user, project=project)


def edit_file(path: Path, editor: str, env: Environment) -> None:
    """Open ``path`` in ``editor`` and wait for it to exit."""
    cmd = shlex.split(editor) + [str(path)]
    try:
        proc.run(cmd, env=env.to_dict()).check_returncode()
    except (OSError, subprocess.CalledProcessError) as e:
        raise EditorFailed("editor exited with error") from e


def new_session_file(
    name: str,
    path: Path,
    editor: str,
    env: Environment,
    user: Optional[str] = None,
    project: Optional[str] = None,
    default_command: str = "bash",
) -> Session:
    """Write a session document from the template if needed, then edit it.

    The edited document must load cleanly. If this call created the file and
    anything fails, the file is removed again.

    Args:
        name: Session name for the template
        path: Where the document lives
        editor: Editor command line
        env: Environment for the editor process; also supplies USER
        user: Repository owner for the template (default $USER)
        project: Project name for the template (default ``name``)
        default_command: Command for windows that do not set one

    Returns:
        The session loaded from the edited document
    """
    created = False
    if not path.exists():
        user = user or env.get("USER", "")
        project = project or name
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(render_template(name, user, project))
        except OSError as e:
            raise TmuxgError(f"failed to open config file {str(path)!r} for writing") from e
        created = True
        logger.info(f"Created session file {path}")

    try:
        edit_file(path, editor, env)
        return load_session(path, default_command=default_command)
    except TmuxgError:
        if created:
            path.unlink(missing_ok=True)
        raise
