"""Build and execute single conversion-tool invocations."""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

# Shell conventions for "command not found" and "not executable".
MISSING_TOOL_RETURNCODE = 127
NOT_EXECUTABLE_RETURNCODE = 126
# An invocation that never produced an exit status of its own.
INVOCATION_ERROR_RETURNCODE = 1


class ConversionError(RuntimeError):
    """Base class for conversion failures."""


class ConversionFailed(ConversionError):
    """The conversion tool reported a failure; carries its stderr text."""

    def __init__(self, stderr: str) -> None:
        super().__init__(stderr)
        self.stderr = stderr


@dataclass(frozen=True)
class CommandInvocation:
    """One fully resolved conversion: input file, output file, options."""

    input_file: str
    output_file: str
    options: str = ""

    def argv(self, tool: str) -> list[str]:
        """Return ``<tool> <input> -o <output> <options...>`` as argv."""

        return [
            tool,
            self.input_file,
            "-o",
            self.output_file,
            *shlex.split(self.options),
        ]


@dataclass(frozen=True)
class ToolResult:
    """Exit status and captured text of one tool process."""

    returncode: int
    stdout: str = ""
    stderr: str = ""


ToolRunner = Callable[[Sequence[str]], ToolResult]


@dataclass(frozen=True)
class InvocationResult:
    """An invocation paired with what the tool produced."""

    invocation: CommandInvocation
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def failed(self) -> bool:
        return self.returncode != 0

    @property
    def error(self) -> Optional[ConversionFailed]:
        if not self.failed:
            return None
        return ConversionFailed(self.stderr)

    def to_payload(self) -> dict[str, str]:
        """Return captured output keyed by stream, omitting empty streams."""

        payload: dict[str, str] = {}
        if self.stdout:
            payload["stdout"] = self.stdout
        if self.stderr:
            payload["stderr"] = self.stderr
        return payload


def build_command(
    input_file: str, output_file: str, options: str = ""
) -> CommandInvocation:
    return CommandInvocation(
        input_file=input_file, output_file=output_file, options=options
    )


def run_tool(argv: Sequence[str]) -> ToolResult:
    """Run ``argv`` to completion, capturing stdout/stderr as text."""

    try:
        completed = subprocess.run(
            list(argv),
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        return ToolResult(
            returncode=MISSING_TOOL_RETURNCODE,
            stderr=f"{argv[0]}: command not found\n",
        )
    except OSError as exc:
        return ToolResult(
            returncode=NOT_EXECUTABLE_RETURNCODE,
            stderr=f"{argv[0]}: {exc.strerror or exc}\n",
        )
    return ToolResult(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


def execute(
    invocation: CommandInvocation,
    *,
    tool: str,
    runner: ToolRunner = run_tool,
) -> InvocationResult:
    """Run ``invocation`` and pair it with the tool's result.

    Never raises: an option string that does not split into arguments, or a
    runner error, becomes a failed result whose stderr names the problem.
    """

    try:
        result = runner(invocation.argv(tool))
    except Exception as exc:
        return InvocationResult(
            invocation=invocation,
            returncode=INVOCATION_ERROR_RETURNCODE,
            stderr=f"{tool}: {exc}\n",
        )
    return InvocationResult(
        invocation=invocation,
        returncode=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
    )


__all__ = [
    "CommandInvocation",
    "ConversionError",
    "ConversionFailed",
    "INVOCATION_ERROR_RETURNCODE",
    "InvocationResult",
    "MISSING_TOOL_RETURNCODE",
    "NOT_EXECUTABLE_RETURNCODE",
    "ToolResult",
    "ToolRunner",
    "build_command",
    "execute",
    "run_tool",
]
