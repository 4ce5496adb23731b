"""Window model for tmuxg."""
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _scalar_to_str(value: Any) -> Any:
    """YAML turns bare numbers and booleans into non-strings; undo that."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class Window(BaseModel):
    """A window to create in the session."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field("", description="Window label, matched against the session focus")
    command: str = Field("", description="Command to run; empty means the default shell")
    cwd: str = Field("", description="Working directory override (unexpanded)")
    keystrokes: List[str] = Field(default_factory=list, description="tmux send-keys tokens, verbatim")

    @field_validator("name", "command", "cwd", mode="before")
    @classmethod
    def _coerce_scalar(cls, value: Any) -> Any:
        return _scalar_to_str(value)

    @field_validator("keystrokes", mode="before")
    @classmethod
    def _coerce_keystrokes(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [_scalar_to_str(v) for v in value]
        return value
