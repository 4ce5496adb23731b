"""Process utilities."""
import logging
import shlex
import subprocess
from typing import List

logger = logging.getLogger(__name__)


def run(cmd: List[str], **kwargs) -> subprocess.CompletedProcess:
    """Run a subprocess synchronously with automatic logging.

    Standard streams are inherited unless the caller asks for capture, since
    tmux, the editor and setup scripts all talk to the user's terminal.

    Args:
        cmd: Command to run as list of strings
        **kwargs: Additional arguments passed to subprocess.run

    Returns:
        CompletedProcess result
    """
    logger.debug(f"Running: {shlex.join(cmd)}")
    if kwargs.get('cwd'):
        logger.debug(f"cwd: {kwargs['cwd']}")

    kwargs.setdefault('text', True)

    try:
        result = subprocess.run(cmd, **kwargs)

        if result.stdout:
            logger.debug(f"stdout: {result.stdout.strip()}")
        if result.stderr:
            logger.debug(f"stderr: {result.stderr.strip()}")

        if result.returncode != 0:
            logger.debug(f"Command failed with exit code {result.returncode}: {shlex.join(cmd)}")
        else:
            logger.debug(f"Command succeeded: {shlex.join(cmd)}")

        return result

    except OSError as e:
        logger.error(f"Command failed with exception: {shlex.join(cmd)} - {e}")
        raise
