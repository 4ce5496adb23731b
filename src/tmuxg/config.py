"""Tool settings for tmuxg.

Settings come from three layers, later ones winning:

1. Defaults declared on the models below
2. A TOML file (``$TMUXG_CONFIG_FILE`` or ``<config dir>/config.toml``)
3. Environment variables named ``TMUXG_<SECTION>_<FIELD>``
"""
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from .errors import SettingsError
from .utils import get_config_dir

logger = logging.getLogger(__name__)

ENV_PREFIX = "TMUXG"
CONFIG_FILE_ENV = "TMUXG_CONFIG_FILE"

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


class TmuxConfig(BaseModel):
    """How tmux is invoked."""

    binary: str = Field("tmux", description="tmux executable")
    isolated_server: bool = Field(True, description="Run each session on its own server (tmux -L <name>)")


class WindowConfig(BaseModel):
    """Window defaults."""

    default_command: str = Field("bash", description="Command for windows that do not set one")


class EditorConfig(BaseModel):
    """Editor used to write session documents."""

    command: str = Field("vim", description="Editor command line")


class Config(BaseModel):
    """Effective tmuxg settings."""

    tmux: TmuxConfig = Field(default_factory=TmuxConfig)
    window: WindowConfig = Field(default_factory=WindowConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)


_config: Optional[Config] = None


def generate_env_var_name(section: str, field: str) -> str:
    """Environment variable that overrides ``section.field``."""
    return f"{ENV_PREFIX}_{section.upper()}_{field.upper()}"


def get_all_env_mappings() -> Dict[str, Tuple[str, str]]:
    """Map every override variable name to its (section, field)."""
    mappings = {}
    for section, section_field in Config.model_fields.items():
        for field in section_field.annotation.model_fields:
            mappings[generate_env_var_name(section, field)] = (section, field)
    return mappings


def _convert_env_value(value: str) -> Any:
    """Convert an environment string to bool, int or str."""
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    try:
        return int(value)
    except ValueError:
        return value


def _field_is_str(section: str, field: str) -> bool:
    section_model = Config.model_fields[section].annotation
    return section_model.model_fields[field].annotation is str


def load_all_env_overrides() -> Dict[str, Dict[str, Any]]:
    """Collect ``TMUXG_*`` overrides into a nested dict."""
    overrides: Dict[str, Dict[str, Any]] = {}
    for env_var, (section, field) in get_all_env_mappings().items():
        if env_var not in os.environ:
            continue
        raw = os.environ[env_var]
        value = raw if _field_is_str(section, field) else _convert_env_value(raw)
        overrides.setdefault(section, {})[field] = value
        logger.debug(f"Config override from {env_var}")
    return overrides


def default_config_path() -> Path:
    """Location of the settings file when no path is given."""
    env_path = os.environ.get(CONFIG_FILE_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir(create=False) / "config.toml"


def load_config(config_path: Optional[str] = None) -> Config:
    """Load settings from file and environment.

    A missing file is not an error; defaults are used instead.

    Raises:
        SettingsError: The file cannot be read or parsed, or a value is invalid
    """
    path = Path(config_path).expanduser() if config_path else default_config_path()

    data: Dict[str, Any] = {}
    if path.is_file():
        logger.debug(f"Loading config from {path}")
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except OSError as e:
            raise SettingsError(f"failed to read settings file {str(path)!r}") from e
        except tomllib.TOMLDecodeError as e:
            raise SettingsError(f"failed to parse settings file {str(path)!r}") from e

    for section, values in load_all_env_overrides().items():
        data.setdefault(section, {}).update(values)

    try:
        return Config(**data)
    except ValidationError as e:
        raise SettingsError(f"invalid settings in {str(path)!r} or TMUXG_* environment") from e


def get_config() -> Config:
    """Return the global config, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Optional[Config]) -> None:
    """Replace the global config (None forces a reload on next use)."""
    global _config
    _config = config


def _toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _env_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def dump_config_toml(config: Config) -> str:
    """Render settings as TOML."""
    lines = []
    for section, values in config.model_dump().items():
        if lines:
            lines.append("")
        lines.append(f"[{section}]")
        for field, value in values.items():
            lines.append(f"{field} = {_toml_value(value)}")
    return "\n".join(lines) + "\n"


def dump_config_env(config: Config) -> str:
    """Render settings as ``TMUXG_*=value`` lines."""
    lines = []
    for section, values in config.model_dump().items():
        for field, value in values.items():
            lines.append(f"{generate_env_var_name(section, field)}={_env_value(value)}")
    return "\n".join(lines)
