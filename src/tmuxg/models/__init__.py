"""Session document models."""
from .session import Session
from .window import Window

__all__ = ["Session", "Window"]
