"""Session model for tmuxg."""
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .window import Window, _scalar_to_str


class Session(BaseModel):
    """A tmux session as described by a session document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str = Field("", description="Session name, also the isolated tmux server label")
    setup_script: str = Field("", alias="setup-script", description="Script run before the session starts")
    environment: Dict[str, str] = Field(default_factory=dict, description="Variables set for the session")
    cwd: str = Field("", description="Default working directory (unexpanded)")
    windows: List[Window] = Field(default_factory=list, description="Windows in index order")
    focus: str = Field("", description="Name of the window selected on attach")

    @field_validator("name", "setup_script", "cwd", "focus", mode="before")
    @classmethod
    def _coerce_scalar(cls, value: Any) -> Any:
        return _scalar_to_str(value)

    @field_validator("environment", mode="before")
    @classmethod
    def _coerce_environment(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(k): _scalar_to_str(v) for k, v in value.items()}
        return value

    @field_validator("windows", mode="before")
    @classmethod
    def _coerce_windows(cls, value: Any) -> Any:
        if value is None:
            return []
        return value

    def focus_index(self) -> int:
        """Index of the first window named like ``focus``, else 0."""
        if not self.focus:
            return 0
        for i, window in enumerate(self.windows):
            if window.name == self.focus:
                return i
        return 0

    def window_cwd(self, window: Window) -> str:
        """Raw working directory for a window, falling back to the session's."""
        return window.cwd or self.cwd

    def with_default_command(self, command: str) -> "Session":
        """Return a copy where windows without a command run ``command``."""
        windows = [
            w if w.command else w.model_copy(update={"command": command})
            for w in self.windows
        ]
        return self.model_copy(update={"windows": windows})

