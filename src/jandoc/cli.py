"""Command-line entry point for jandoc."""

from __future__ import annotations

import argparse
import sys
from importlib import metadata
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence

from dotenv import find_dotenv, load_dotenv

from jandoc.core import workspace as workspace_mod
from jandoc.core.logging import configure_logger
from jandoc.convert import (
    ConversionError,
    FormatResolutionError,
    JandocConfigError,
    UsageError,
    load_config,
    run,
)
from jandoc.convert.config import default_config_path, write_default_config
from jandoc.convert.reporter import PROGRAM_NAME

# Long spellings folded onto the short flags ``run`` looks up.
FLAG_ALIASES: Mapping[str, str] = {
    "--input-data": "-d",
    "--output-location": "-o",
    "--to": "-t",
    "--write": "-t",
}

USAGE = """\
Usage: jandoc -d <input> -o <output> [-t <format>] [pandoc options...]
       jandoc config init [--path PATH] [--force]

  -d, --input-data PATH       File or directory to convert (one level deep).
  -o, --output-location PATH  Output file, or directory when it has no
                              extension (created if missing).
  -t, --to FORMAT             Output format; inferred from the output
                              file's extension when omitted.

Any other options are passed to the conversion tool unchanged."""


def parse_flags(tokens: Sequence[str]) -> dict[str, list[str]]:
    """Group ``tokens`` into ``{flag: [values...]}``.

    Every token starting with ``-`` opens a flag; following tokens are its
    values until the next flag. ``--flag=value`` carries its value inline.
    Values appearing before the first flag are ignored.
    """

    flags: dict[str, list[str]] = {}
    current: Optional[str] = None
    for token in tokens:
        if not token.startswith("-") or token == "-":
            if current is not None:
                flags[current].append(token)
            continue
        name, sep, value = token.partition("=")
        if sep and name.startswith("--"):
            flags.setdefault(FLAG_ALIASES.get(name, name), []).append(value)
            current = None
            continue
        current = FLAG_ALIASES.get(token, token)
        flags.setdefault(current, [])
    return flags


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(argv if argv is not None else sys.argv[1:])

    if not args:
        _print(USAGE, stream=sys.stderr.write)
        return 2
    if args[0] in ("-h", "--help"):
        _print(USAGE)
        return 0
    if args[0] == "--version":
        return _handle_version()
    if args[0] == "config":
        return _handle_config(args[1:])

    load_dotenv(find_dotenv(usecwd=True))
    try:
        load_result = load_config()
    except JandocConfigError as exc:
        _error(str(exc))
        return 1

    logger, _ = configure_logger(
        "jandoc.convert",
        log_dir=load_result.layout.path_for("logs"),
        level=load_result.config.log_level,
        verbose=load_result.config.verbose,
    )
    logger.debug("jandoc CLI invoked", extra={"argv": args})

    try:
        outcome = run(
            args,
            parse_flags(args),
            config=load_result.config,
            logger=logger,
        )
    except FormatResolutionError as exc:
        _error(str(exc))
        return 1
    except UsageError as exc:
        _error(str(exc))
        _print(USAGE, stream=sys.stderr.write)
        return 1
    except ConversionError as exc:
        _error(str(exc))
        return 1

    return outcome.exit_code if outcome is not None else 0


def _handle_version() -> int:
    try:
        version = metadata.version("jandoc")
    except metadata.PackageNotFoundError:
        version = "unknown"
    _print(version)
    return 0


def _handle_config(argv: Sequence[str]) -> int:
    parser = argparse.ArgumentParser(
        prog="jandoc config",
        description="Manage the jandoc configuration file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    init_parser = subparsers.add_parser(
        "init", help="Write the default jandoc.toml template."
    )
    init_parser.add_argument(
        "--path",
        type=Path,
        help="Destination file (defaults to the workspace config directory).",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the destination if it already exists.",
    )
    args = parser.parse_args(list(argv))

    try:
        if args.path is not None:
            target = args.path.expanduser()
        else:
            target = default_config_path(workspace_mod.ensure_workspace())
        written = write_default_config(target, overwrite=args.force)
    except (JandocConfigError, workspace_mod.WorkspaceError) as exc:
        _error(str(exc))
        return 1

    _print(f"Wrote jandoc config to {written}")
    return 0


def _error(message: str) -> None:
    _print(f"{PROGRAM_NAME}: {message}", stream=sys.stderr.write)


def _print(
    text: str, *, stream: Optional[Callable[[str], object]] = None
) -> None:
    target = stream if stream is not None else sys.stdout.write
    if text:
        target(text + "\n")


if __name__ == "__main__":  # pragma: no cover - manual invocation guard
    raise SystemExit(main())
