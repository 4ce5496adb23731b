"""Main CLI entry point for tmuxg."""
import logging

import click

from .. import __version__
from .config import config
from .session import edit, start


def setup_logging(log_level: str) -> None:
    """Configure logging for the application."""
    level = getattr(logging, log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),  # stderr
        ]
    )
    logging.getLogger('tmuxg').setLevel(level)


@click.group()
@click.option('--log-level', default='WARNING', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Set logging level')
@click.version_option(__version__, prog_name="tmuxg")
def cli(log_level):
    """Start tmux sessions from YAML session files."""
    setup_logging(log_level)


cli.add_command(start)
cli.add_command(edit)
cli.add_command(config)


if __name__ == "__main__":
    cli()
