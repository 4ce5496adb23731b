"""Shared test fixtures."""
import subprocess

import pytest


class FakeTmux:
    """Records tmux calls instead of running them."""

    def __init__(self, failures=None, attach_code=0):
        # subcommand -> returncode, e.g. {"new-window": 1}
        self.failures = failures or {}
        self.attach_code = attach_code
        self.calls = []

    def run(self, args):
        self.calls.append(list(args))
        subcommand = args[0]
        if subcommand == "attach":
            returncode = self.attach_code
        else:
            returncode = self.failures.get(subcommand, 0)
        return subprocess.CompletedProcess(args, returncode)

    def subcommands(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_tmux():
    """A tmux executor that only records calls."""
    return FakeTmux()


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point XDG_CONFIG_HOME at a temporary directory."""
    home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home


@pytest.fixture
def reset_global_config():
    """Reset the global tool config after each test."""
    import tmuxg.config as config_module

    original = config_module._config
    config_module.set_config(None)

    yield

    config_module.set_config(original)
