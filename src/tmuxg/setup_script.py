"""Run a session's embedded setup script."""
import logging
import os
import subprocess
import tempfile
from pathlib import Path

from . import proc
from .environ import Environment
from .errors import SetupScriptFailed

logger = logging.getLogger(__name__)

FALLBACK_INTERPRETER = "/bin/sh"


def run_setup_script(script: str, env: Environment) -> None:
    """Write ``script`` to a temporary executable and run it.

    The script runs with inherited standard streams and the given environment.
    Scripts without a ``#!`` line are run through /bin/sh. The temporary file
    is removed whether or not the script succeeds.

    Raises:
        SetupScriptFailed: The script could not be written, spawned, or exited non-zero
    """
    body = script.strip()
    if not body:
        return

    try:
        fd, name = tempfile.mkstemp(prefix="tmuxg-setup")
    except OSError as e:
        raise SetupScriptFailed("failed to create temporary file for script") from e
    path = Path(name)

    try:
        try:
            with os.fdopen(fd, "w") as f:
                f.write(body)
            os.chmod(path, 0o700)
        except OSError as e:
            raise SetupScriptFailed("failed to write temporary script file") from e

        cmd = [str(path)] if body.startswith("#!") else [FALLBACK_INTERPRETER, str(path)]
        logger.info(f"Running setup script {path}")
        try:
            result = proc.run(cmd, env=env.to_dict())
            result.check_returncode()
        except (OSError, subprocess.CalledProcessError) as e:
            raise SetupScriptFailed("failed to execute setup script") from e
    finally:
        path.unlink(missing_ok=True)
