"""jandoc: batch document conversion on top of an external converter."""

from __future__ import annotations

from .convert import (
    BatchOutcome,
    ConversionFailed,
    FormatResolutionError,
    UsageError,
    assemble_options,
    dispatch,
    resolve_format,
    run,
)

__all__ = [
    "BatchOutcome",
    "ConversionFailed",
    "FormatResolutionError",
    "UsageError",
    "assemble_options",
    "dispatch",
    "resolve_format",
    "run",
]
