"""Tests for running setup scripts."""
import os
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from tmuxg.environ import Environment
from tmuxg.errors import SetupScriptFailed
from tmuxg.setup_script import run_setup_script


@pytest.fixture
def env():
    return Environment(os.environ)


def test_script_runs_and_temp_file_is_removed(tmp_path, env):
    """The script records its own path; that path is gone afterwards."""
    out = tmp_path / "out"
    run_setup_script(f'echo hi > {out}\necho "$0" >> {out}', env)

    lines = out.read_text().splitlines()
    assert lines[0] == "hi"
    script_path = Path(lines[1])
    assert script_path.name.startswith("tmuxg-setup")
    assert not script_path.exists()


def test_script_with_shebang_runs_directly(tmp_path, env):
    out = tmp_path / "out"
    run_setup_script(f"#!/bin/sh\necho direct > {out}\n", env)

    assert out.read_text() == "direct\n"


def test_script_sees_given_environment(tmp_path):
    out = tmp_path / "out"
    env = Environment(os.environ).with_values({"TMUXG_SETUP_VALUE": "from-session"})

    run_setup_script(f'echo "$TMUXG_SETUP_VALUE" > {out}', env)

    assert out.read_text() == "from-session\n"
    assert "TMUXG_SETUP_VALUE" not in os.environ


def test_script_is_written_trimmed_and_executable(env):
    seen = {}

    def fake_run(cmd, **kwargs):
        path = Path(cmd[-1])
        seen["cmd"] = cmd
        seen["body"] = path.read_text()
        seen["mode"] = path.stat().st_mode & 0o777
        seen["path"] = path
        return subprocess.CompletedProcess(cmd, 0)

    with patch("tmuxg.setup_script.proc.run", side_effect=fake_run):
        run_setup_script("\n  echo hi  \n\n", env)

    assert seen["body"] == "echo hi"
    assert seen["mode"] == 0o700
    assert seen["cmd"][0] == "/bin/sh"
    assert not seen["path"].exists()


def test_failing_script_raises_and_cleans_up(env):
    paths = []

    def fake_run(cmd, **kwargs):
        paths.append(Path(cmd[-1]))
        return subprocess.CompletedProcess(cmd, 3)

    with patch("tmuxg.setup_script.proc.run", side_effect=fake_run):
        with pytest.raises(SetupScriptFailed) as exc_info:
            run_setup_script("exit 3", env)

    assert isinstance(exc_info.value.__cause__, subprocess.CalledProcessError)
    assert exc_info.value.__cause__.returncode == 3
    assert not paths[0].exists()


def test_real_failing_script(env):
    with pytest.raises(SetupScriptFailed):
        run_setup_script("exit 1", env)


def test_spawn_failure_raises(env):
    with patch("tmuxg.setup_script.proc.run", side_effect=PermissionError("denied")):
        with pytest.raises(SetupScriptFailed) as exc_info:
            run_setup_script("#!/nonexistent/interpreter\n", env)

    assert isinstance(exc_info.value.__cause__, PermissionError)


def test_empty_script_does_nothing(env):
    with patch("tmuxg.setup_script.proc.run") as mock_run:
        run_setup_script("", env)
        run_setup_script("   \n", env)

    mock_run.assert_not_called()
