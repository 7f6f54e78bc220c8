"""Map inputs to outputs, run one conversion per file, collect outcomes."""

from __future__ import annotations

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from rich.console import Console

from jandoc.core.paths import base_name, has_extension, is_directory

from .command import (
    CommandInvocation,
    ConversionError,
    ConversionFailed,
    InvocationResult,
    ToolRunner,
    build_command,
    execute,
    run_tool,
)
from .reporter import report

DEFAULT_MAX_WORKERS = 4

ConversionCallback = Callable[[Optional[ConversionFailed], dict], None]

_LOGGER = logging.getLogger("jandoc.convert")


class OutputDirectoryError(ConversionError):
    """Raised when a directory-mode output path cannot be created."""


@dataclass(frozen=True)
class BatchOutcome:
    """Results of every invocation in a batch, in completion order."""

    output_format: str
    results: tuple[InvocationResult, ...]

    @property
    def success_count(self) -> int:
        return sum(1 for result in self.results if not result.failed)

    @property
    def failure_count(self) -> int:
        return sum(1 for result in self.results if result.failed)

    @property
    def exit_code(self) -> int:
        return 1 if self.failure_count else 0


def plan_invocations(
    input_path: str,
    output_path: str,
    options: str,
    *,
    logger: logging.Logger = _LOGGER,
) -> Iterator[CommandInvocation]:
    """Yield one invocation per input file.

    Directory-mode output directories are created right before the first
    invocation that writes into them. A directory input is read one level
    deep; nested directories are skipped. When a directory input targets a
    file-mode output, every invocation writes that same file.
    """

    directory_mode = not has_extension(output_path)

    if not is_directory(input_path):
        if directory_mode:
            ensure_output_directory(output_path, logger=logger)
            target = os.path.join(output_path, base_name(input_path))
        else:
            target = output_path
        yield build_command(input_path, target, options)
        return

    if not directory_mode:
        logger.warning(
            "Directory input targets a single output file; the last "
            "conversion to finish wins",
            extra={"input_path": input_path, "output_path": output_path},
        )

    for entry in sorted(os.listdir(input_path)):
        source = os.path.join(input_path, entry)
        if is_directory(source):
            logger.debug(
                "Skipping nested directory", extra={"source": source}
            )
            continue
        if directory_mode:
            ensure_output_directory(output_path, logger=logger)
            target = os.path.join(output_path, entry)
        else:
            target = output_path
        yield build_command(source, target, options)


def ensure_output_directory(
    path: str, *, logger: logging.Logger = _LOGGER
) -> None:
    if is_directory(path):
        return
    try:
        os.makedirs(path, exist_ok=True)
    except FileExistsError as exc:
        raise OutputDirectoryError(
            f"Output path exists and is not a directory: {path}"
        ) from exc
    except OSError as exc:
        raise OutputDirectoryError(
            f"Unable to create output directory {path}: {exc}"
        ) from exc
    logger.info("Created output directory", extra={"output_dir": path})


def dispatch(
    input_path: str,
    output_path: str,
    output_format: str,
    options: str,
    callback: Optional[ConversionCallback] = None,
    *,
    tool: str = "pandoc",
    tool_name: Optional[str] = None,
    runner: ToolRunner = run_tool,
    max_workers: int = DEFAULT_MAX_WORKERS,
    console: Optional[Console] = None,
    logger: Optional[logging.Logger] = None,
) -> Optional[BatchOutcome]:
    """Run one conversion per input file on a bounded worker pool.

    With ``callback``, it is called once per invocation as
    ``callback(error_or_None, payload)`` and nothing is returned; the caller
    counts completions. Without it, each result is printed via
    :func:`~jandoc.convert.reporter.report` and a :class:`BatchOutcome` is
    returned.
    """

    logger = logger or _LOGGER
    tool_name = tool_name or tool
    logger.info(
        "Starting conversion batch",
        extra={
            "input_path": input_path,
            "output_path": output_path,
            "format": output_format,
            "max_workers": max_workers,
        },
    )

    results: list[InvocationResult] = []
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures: dict[Future[InvocationResult], CommandInvocation] = {}
        for invocation in plan_invocations(
            input_path, output_path, options, logger=logger
        ):
            logger.debug(
                "Submitting conversion",
                extra={
                    "input_file": invocation.input_file,
                    "output_file": invocation.output_file,
                },
            )
            futures[
                pool.submit(execute, invocation, tool=tool, runner=runner)
            ] = invocation

        for future in as_completed(futures):
            result = future.result()
            _log_result(logger, result)
            if callback is not None:
                callback(result.error, result.to_payload())
                continue
            report(result, tool_name=tool_name, console=console)
            results.append(result)

    if callback is not None:
        logger.info(
            "Completed conversion batch", extra={"invocations": len(futures)}
        )
        return None

    outcome = BatchOutcome(output_format=output_format, results=tuple(results))
    logger.info(
        "Completed conversion batch",
        extra={
            "success_count": outcome.success_count,
            "failure_count": outcome.failure_count,
        },
    )
    return outcome


def _log_result(logger: logging.Logger, result: InvocationResult) -> None:
    extra = {
        "input_file": result.invocation.input_file,
        "output_file": result.invocation.output_file,
        "returncode": result.returncode,
    }
    if result.failed:
        logger.error(
            "Conversion failed", extra={**extra, "stderr": result.stderr}
        )
    else:
        logger.info("Converted document", extra=extra)


__all__ = [
    "BatchOutcome",
    "ConversionCallback",
    "DEFAULT_MAX_WORKERS",
    "OutputDirectoryError",
    "dispatch",
    "ensure_output_directory",
    "plan_invocations",
]
