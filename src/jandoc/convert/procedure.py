"""Entry point tying option assembly, format resolution and dispatch."""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from rich.console import Console

from .command import ToolRunner, run_tool
from .config import JandocConfig
from .dispatcher import BatchOutcome, ConversionCallback, dispatch
from .options import UsageError, assemble_options, resolve_format


def run(
    raw_args: Sequence[str],
    parsed_flags: Mapping[str, Sequence[str]],
    callback: Optional[ConversionCallback] = None,
    *,
    config: Optional[JandocConfig] = None,
    runner: ToolRunner = run_tool,
    console: Optional[Console] = None,
    logger: Optional[logging.Logger] = None,
) -> Optional[BatchOutcome]:
    """Convert ``-d`` into ``-o`` using the remaining arguments as options.

    ``parsed_flags`` maps flag names to their values; the first value of
    ``-d``, ``-o`` and the optional ``-t`` is used. Raises
    :class:`~jandoc.convert.options.FormatResolutionError` when ``-t`` is
    absent and ``-o`` names a directory or has no extension.
    """

    config = config or JandocConfig()
    input_path = _required(parsed_flags, "-d")
    output_path = _required(parsed_flags, "-o")
    output_format = resolve_format(_first(parsed_flags, "-t"), output_path)

    return dispatch(
        input_path,
        output_path,
        output_format,
        assemble_options(raw_args),
        callback,
        tool=config.tool_command,
        tool_name=config.tool_name,
        runner=runner,
        max_workers=config.max_workers,
        console=console,
        logger=logger,
    )


def _first(flags: Mapping[str, Sequence[str]], name: str) -> Optional[str]:
    values = flags.get(name)
    if not values:
        return None
    return values[0]


def _required(flags: Mapping[str, Sequence[str]], name: str) -> str:
    value = _first(flags, name)
    if not value:
        raise UsageError(f"Missing required flag {name} <path>.")
    return value


__all__ = ["run"]
