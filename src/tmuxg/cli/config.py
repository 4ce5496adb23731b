"""Configuration commands."""
import click

from ..config import Config, dump_config_env, dump_config_toml, get_config
from ..errors import SettingsError, format_error_chain

FORMATS = click.Choice(["toml", "env"])


def _render(config: Config, fmt: str) -> str:
    if fmt == "env":
        return dump_config_env(config)
    return dump_config_toml(config)


@click.group()
def config():
    """Configuration management commands."""
    pass


@config.command("show")
@click.option("--format", "fmt", type=FORMATS, default="toml", help="Output format")
@click.pass_context
def show(ctx, fmt):
    """Show current effective configuration."""
    try:
        current = get_config()
    except SettingsError as e:
        click.echo(f"tmuxg: {format_error_chain(e)}", err=True)
        ctx.exit(1)
    click.echo(_render(current, fmt).rstrip("\n"))


@config.command("defaults")
@click.option("--format", "fmt", type=FORMATS, default="toml", help="Output format")
def defaults(fmt):
    """Show default configuration values."""
    click.echo(_render(Config(), fmt).rstrip("\n"))
