"""tmux invocation."""
import logging
import subprocess
from typing import List, Optional

from . import proc
from .environ import Environment

logger = logging.getLogger(__name__)


class Tmux:
    """Runs tmux commands against one server.

    With ``socket_name`` set, every call is addressed to that isolated
    server (``tmux -L <socket_name>``) rather than the user's default one.
    """

    def __init__(
        self,
        socket_name: Optional[str] = None,
        binary: str = "tmux",
        env: Optional[Environment] = None,
        cwd: Optional[str] = None,
    ):
        self.socket_name = socket_name
        self.binary = binary
        self.env = env
        self.cwd = cwd or None

    def command(self, args: List[str]) -> List[str]:
        """Full argv for a tmux subcommand."""
        cmd = [self.binary]
        if self.socket_name:
            cmd.extend(["-L", self.socket_name])
        cmd.extend(args)
        return cmd

    def run(self, args: List[str]) -> subprocess.CompletedProcess:
        """Run a tmux subcommand with inherited standard streams.

        Returns the CompletedProcess; the caller decides what a non-zero
        exit means.
        """
        return proc.run(
            self.command(args),
            env=self.env.to_dict() if self.env is not None else None,
            cwd=self.cwd,
        )
