"""Read jandoc TOML files over a table of defaults, and write templates."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Mapping

__all__ = [
    "TomlConfigError",
    "read_table",
    "overlay",
    "write_template",
]


class TomlConfigError(RuntimeError):
    """Raised when a TOML document cannot be read, parsed or applied."""


def read_table(path: Path, defaults: Mapping[str, Any]) -> dict[str, Any]:
    """Parse ``path`` and return it laid over a copy of ``defaults``.

    Keys missing from ``defaults`` are rejected, so a typo in the file is an
    error rather than a silently ignored setting.
    """

    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except FileNotFoundError as exc:
        raise TomlConfigError(f"Config file not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise TomlConfigError(f"Invalid TOML in {path}: {exc}") from exc
    return overlay(defaults, document)


def overlay(
    defaults: Mapping[str, Any],
    values: Mapping[str, Any],
    *,
    where: str = "",
) -> dict[str, Any]:
    """Return a new table: ``defaults`` with ``values`` applied on top.

    Neither argument is modified. Sub-tables of ``defaults`` are copied.
    """

    merged = {
        key: overlay(default, {}, where=f"{where}{key}.")
        if isinstance(default, Mapping)
        else default
        for key, default in defaults.items()
    }
    for key, value in values.items():
        name = f"{where}{key}"
        if key not in defaults:
            raise TomlConfigError(f"Unknown configuration key '{name}'.")
        default = defaults[key]
        if not isinstance(default, Mapping):
            merged[key] = value
        elif isinstance(value, Mapping):
            merged[key] = overlay(default, value, where=f"{name}.")
        else:
            raise TomlConfigError(
                f"Expected table for '{name}', found {type(value).__name__}."
            )
    return merged


def write_template(path: Path, text: str, *, overwrite: bool = False) -> Path:
    """Write ``text`` to ``path``, keeping an existing file unless asked."""

    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with path.open("w" if overwrite else "x", encoding="utf-8") as handle:
            handle.write(text)
    except FileExistsError as exc:
        raise TomlConfigError(f"Config already exists: {path}") from exc
    return path
