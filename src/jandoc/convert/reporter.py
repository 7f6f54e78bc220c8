"""Console reporting of conversion-tool output."""

from __future__ import annotations

import re
from typing import Optional

from rich.console import Console

from .command import InvocationResult

PROGRAM_NAME = "jandoc"
FAILURE_NOTICE = f"{PROGRAM_NAME}: conversion was NOT successful."

_TRAILING_NEWLINES = re.compile(r"\n*$")


def rewrite_message(text: str, *, tool_name: str) -> str:
    """Replace a leading ``<tool_name>: `` prefix and trim trailing newlines."""

    prefix = re.compile(rf"^{re.escape(tool_name)}:\s")
    rewritten = prefix.sub(f"{PROGRAM_NAME}: ", text, count=1)
    return _TRAILING_NEWLINES.sub("", rewritten, count=1)


def report(
    result: InvocationResult,
    *,
    tool_name: str,
    console: Optional[Console] = None,
) -> None:
    """Print the tool's messages for ``result``.

    Any stderr text is followed by :data:`FAILURE_NOTICE`, even when the tool
    exited successfully with warnings.
    """

    console = console or Console(highlight=False, emoji=False)
    if result.stdout:
        _print(console, rewrite_message(result.stdout, tool_name=tool_name))
    if result.stderr:
        message = rewrite_message(result.stderr, tool_name=tool_name)
        _print(console, f"{message}\n{FAILURE_NOTICE}")


def _print(console: Console, text: str) -> None:
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


__all__ = [
    "FAILURE_NOTICE",
    "PROGRAM_NAME",
    "report",
    "rewrite_message",
]
