"""Batch conversion: option handling, dispatch and reporting."""

from __future__ import annotations

from .command import (
    CommandInvocation,
    ConversionError,
    ConversionFailed,
    InvocationResult,
    ToolResult,
    ToolRunner,
    build_command,
    execute,
    run_tool,
)
from .config import (
    CONFIG_FILENAME,
    ConfigOverrides,
    JandocConfig,
    JandocConfigError,
    LoadResult,
    load_config,
)
from .dispatcher import (
    BatchOutcome,
    OutputDirectoryError,
    dispatch,
    plan_invocations,
)
from .options import (
    FormatResolutionError,
    UsageError,
    assemble_options,
    resolve_format,
)
from .procedure import run
from .reporter import FAILURE_NOTICE, report

__all__ = [
    "CommandInvocation",
    "ConversionError",
    "ConversionFailed",
    "InvocationResult",
    "ToolResult",
    "ToolRunner",
    "build_command",
    "execute",
    "run_tool",
    "CONFIG_FILENAME",
    "ConfigOverrides",
    "JandocConfig",
    "JandocConfigError",
    "LoadResult",
    "load_config",
    "BatchOutcome",
    "OutputDirectoryError",
    "dispatch",
    "plan_invocations",
    "FormatResolutionError",
    "UsageError",
    "assemble_options",
    "resolve_format",
    "run",
    "FAILURE_NOTICE",
    "report",
]
