"""Shared helpers: paths, TOML config, workspace and logging."""

from __future__ import annotations

from .config import TomlConfigError, overlay, read_table, write_template
from .logging import JsonLogFormatter, configure_logger
from .paths import (
    PathKind,
    base_name,
    classify_path,
    extension_of,
    has_extension,
    is_directory,
    strip_extension,
)
from .workspace import (
    WORKSPACE_ENV,
    WorkspaceError,
    WorkspaceLayout,
    ensure_workspace,
)

__all__ = [
    "TomlConfigError",
    "overlay",
    "read_table",
    "write_template",
    "JsonLogFormatter",
    "configure_logger",
    "PathKind",
    "base_name",
    "classify_path",
    "extension_of",
    "has_extension",
    "is_directory",
    "strip_extension",
    "WORKSPACE_ENV",
    "WorkspaceError",
    "WorkspaceLayout",
    "ensure_workspace",
]
