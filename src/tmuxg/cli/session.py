"""Session commands."""
import logging
import os
from pathlib import Path
from typing import Optional

import click

from ..bootstrap import new_session_file
from ..config import Config, get_config
from ..environ import Environment, resolve_environment
from ..errors import ConfigNotFound, TmuxgError, format_error_chain
from ..loader import load_session, locate_session
from ..materialize import materialize, plan_session
from ..setup_script import run_setup_script
from ..tmux import Tmux
from ..utils import session_file_path

logger = logging.getLogger(__name__)


def start_session(
    name: str,
    config: Config,
    env: Environment,
    setup: bool = False,
    user: Optional[str] = None,
    project: Optional[str] = None,
) -> int:
    """Load, prepare and start the session ``name``, then attach to it.

    A session with no document yet is created from the template and opened
    in the editor first. The setup script runs when ``setup`` is set, when
    the document was just created, or when the session cwd does not exist.

    Returns:
        Exit code of the tmux client
    """
    default_command = config.window.default_command
    try:
        path = locate_session(name, env)
        session = load_session(path, default_command=default_command)
    except ConfigNotFound as e:
        logger.info(f"{e}, creating it")
        session = new_session_file(
            name,
            e.path,
            config.editor.command,
            env,
            user=user,
            project=project,
            default_command=default_command,
        )
        setup = True

    env, environment = resolve_environment(session, env)
    ops = plan_session(session, env, environment)

    cwd = env.expand(session.cwd)
    if cwd and not os.path.exists(cwd):
        logger.info(f"{cwd} does not exist")
        setup = True

    if setup and session.setup_script:
        run_setup_script(session.setup_script, env)

    tmux = Tmux(
        socket_name=session.name if config.tmux.isolated_server else None,
        binary=config.tmux.binary,
        env=env,
        cwd=cwd,
    )
    return materialize(ops, tmux)


def _fail(ctx: click.Context, error: TmuxgError):
    click.echo(f"tmuxg: {format_error_chain(error)}", err=True)
    ctx.exit(1)


@click.command()
@click.argument("name")
@click.option("--setup", is_flag=True, help="Run the session setup script")
@click.option("--user", default=None, help="Repository owner for a new session file (default $USER)")
@click.option("--project", default=None, help="Project for a new session file (default NAME)")
@click.pass_context
def start(ctx, name, setup, user, project):
    """Start the session NAME (a session name or a path to a session file)."""
    try:
        exit_code = start_session(name, get_config(), Environment.from_process(), setup, user, project)
    except TmuxgError as e:
        _fail(ctx, e)
    ctx.exit(exit_code)


@click.command()
@click.argument("name")
@click.option("--user", default=None, help="Repository owner for a new session file (default $USER)")
@click.option("--project", default=None, help="Project for a new session file (default NAME)")
@click.pass_context
def edit(ctx, name, user, project):
    """Edit the session file for NAME, creating it if needed."""
    env = Environment.from_process()
    path = Path(name)
    try:
        config = get_config()
        if not path.is_file():
            path = session_file_path(name, env)
        new_session_file(
            name,
            path,
            config.editor.command,
            env,
            user=user,
            project=project,
            default_command=config.window.default_command,
        )
    except TmuxgError as e:
        _fail(ctx, e)
    except OSError as e:
        click.echo(f"tmuxg: failed to create config directory: {e}", err=True)
        ctx.exit(1)
