"""Shared testing fixtures for the jandoc test suite."""

from .tool import FakeTool  # noqa: F401
from .workspace import TreeBuilder, build_tree  # noqa: F401

__all__ = [
    "FakeTool",
    "TreeBuilder",
    "build_tree",
]
