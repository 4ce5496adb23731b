"""Provision tmux sessions from declarative YAML documents."""

__version__ = "0.1.0"
