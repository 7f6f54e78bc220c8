"""Turn caller arguments into a pass-through option string and a format."""

from __future__ import annotations

import os
import shlex
from typing import Optional, Sequence

from jandoc.core.paths import extension_of, has_extension, is_directory

# Flags carrying the input/output paths. They are consumed by jandoc and
# never forwarded to the conversion tool.
PATH_FLAGS: frozenset[str] = frozenset(
    {"-o", "--output-location", "-d", "--input-data"}
)

_FORMAT_ALIASES = {"html5": "html"}


class UsageError(RuntimeError):
    """Raised when the caller's arguments cannot describe a conversion."""


class FormatResolutionError(UsageError):
    """Raised when no output format can be determined."""


def assemble_options(raw_args: Sequence[str]) -> str:
    """Return ``raw_args`` without the path flags, joined into one string.

    Path flags are matched on whole tokens only: ``-o out.html`` and
    ``--output-location=out.html`` are dropped, ``--foo-o`` is kept.
    Tokens that need it are shell-quoted so the string splits back into the
    same tokens.
    """

    kept: list[str] = []
    tokens = iter(raw_args)
    for token in tokens:
        if token in PATH_FLAGS:
            next(tokens, None)
            continue
        flag, sep, _ = token.partition("=")
        if sep and flag.startswith("--") and flag in PATH_FLAGS:
            continue
        kept.append(token)
    return shlex.join(kept)


def normalize_format(value: str) -> str:
    stripped = value.strip()
    return _FORMAT_ALIASES.get(stripped, stripped)


def resolve_format(
    explicit_format: Optional[str],
    output_path: str | os.PathLike[str],
) -> str:
    """Decide the output format for a batch.

    A non-blank explicit format always wins (after normalization) and the
    output path is not consulted. Otherwise the output path's extension is
    used verbatim; a directory or an extension-less output path raises
    :class:`FormatResolutionError`.
    """

    normalized = normalize_format(explicit_format or "")
    if normalized:
        return normalized
    if is_directory(output_path) or not has_extension(output_path):
        raise FormatResolutionError("No output filetype specified.")
    return extension_of(output_path)


__all__ = [
    "PATH_FLAGS",
    "FormatResolutionError",
    "UsageError",
    "assemble_options",
    "normalize_format",
    "resolve_format",
]
