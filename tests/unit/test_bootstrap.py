"""Tests for creating session documents."""
import subprocess
from unittest.mock import patch

import pytest
import yaml

from tmuxg.bootstrap import edit_file, new_session_file, render_template
from tmuxg.environ import Environment
from tmuxg.errors import ConfigParseError, EditorFailed


@pytest.fixture
def env():
    return Environment({"USER": "me", "HOME": "/home/me", "PATH": "/usr/bin:/bin"})


def test_render_template_is_a_valid_session():
    data = yaml.safe_load(render_template("proj", "someone", "thing"))

    assert data["name"] == "proj"
    assert data["environment"] == {"GOPATH": "${HOME}/go/proj"}
    assert data["cwd"] == "${GOPATH}/src/github.com/someone/thing"
    assert "go get -d github.com/someone/thing/..." in data["setup-script"]
    assert [w["name"] for w in data["windows"]] == ["editor", "shell"]
    assert data["focus"] == "editor"


def test_edit_file_runs_editor(tmp_path, env):
    path = tmp_path / "s.yaml"
    with patch("tmuxg.bootstrap.proc.run", return_value=subprocess.CompletedProcess([], 0)) as mock_run:
        edit_file(path, "code --wait", env)

    assert mock_run.call_args.args[0] == ["code", "--wait", str(path)]
    assert mock_run.call_args.kwargs["env"] == env.to_dict()


def test_edit_file_missing_editor(tmp_path, env):
    with patch("tmuxg.bootstrap.proc.run", side_effect=FileNotFoundError("nope")):
        with pytest.raises(EditorFailed):
            edit_file(tmp_path / "s.yaml", "nope", env)


@patch("tmuxg.bootstrap.proc.run", return_value=subprocess.CompletedProcess([], 0))
def test_new_session_file_defaults(mock_run, tmp_path, env):
    path = tmp_path / "tmuxg" / "proj.yaml"

    session = new_session_file("proj", path, "vim", env)

    assert session.name == "proj"
    assert session.cwd == "${GOPATH}/src/github.com/me/proj"
    assert session.windows[1].command == "bash"
    assert path.exists()


@patch("tmuxg.bootstrap.proc.run", return_value=subprocess.CompletedProcess([], 0))
def test_new_session_file_keeps_existing(mock_run, tmp_path, env):
    path = tmp_path / "proj.yaml"
    path.write_text("name: custom\nwindows:\n  - name: only\n")

    session = new_session_file("proj", path, "vim", env, user="x", project="y")

    assert session.name == "custom"
    assert path.read_text().startswith("name: custom")


@patch("tmuxg.bootstrap.proc.run", return_value=subprocess.CompletedProcess([], 1))
def test_new_session_file_removes_created_file_on_failure(mock_run, tmp_path, env):
    path = tmp_path / "proj.yaml"

    with pytest.raises(EditorFailed):
        new_session_file("proj", path, "vim", env)

    assert not path.exists()


@patch("tmuxg.bootstrap.proc.run", return_value=subprocess.CompletedProcess([], 0))
def test_new_session_file_keeps_existing_file_on_failure(mock_run, tmp_path, env):
    path = tmp_path / "proj.yaml"
    path.write_text("windows: [broken\n")

    with pytest.raises(ConfigParseError):
        new_session_file("proj", path, "vim", env)

    assert path.exists()
