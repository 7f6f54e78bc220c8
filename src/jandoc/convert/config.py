"""Configuration loader for jandoc conversion runs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Mapping, Optional

from jandoc.core import config as core_config
from jandoc.core import workspace as workspace_mod

CONFIG_FILENAME = "jandoc.toml"
CONFIG_ENV = "JANDOC_CONFIG"
ENV_PREFIX = "JANDOC_"

_DEFAULT_COMMAND = "pandoc"
_DEFAULT_MAX_WORKERS = 4
_DEFAULT_LOG_LEVEL = "INFO"
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class JandocConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


@dataclass(frozen=True)
class JandocConfig:
    """Fully resolved settings for a conversion run."""

    tool_command: str = _DEFAULT_COMMAND
    tool_name: str = _DEFAULT_COMMAND
    max_workers: int = _DEFAULT_MAX_WORKERS
    log_level: str = _DEFAULT_LOG_LEVEL
    verbose: bool = False


@dataclass(frozen=True)
class ConfigOverrides:
    """Programmatic overrides applied on top of env and file options."""

    tool_command: Optional[str] = None
    max_workers: Optional[int] = None
    log_level: Optional[str] = None
    verbose: Optional[bool] = None


@dataclass(frozen=True)
class LoadResult:
    """Loaded configuration plus the workspace it was resolved against."""

    config: JandocConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Load configuration applying precedence overrides > env > TOML."""

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    try:
        layout = workspace_mod.ensure_workspace(env=env_map, path=workspace_path)
    except workspace_mod.WorkspaceError as exc:
        raise JandocConfigError(str(exc)) from exc

    requested = _resolve_config_path(config_path, env_map, layout)
    table = _default_table()
    loaded_path: Optional[Path] = None
    if requested.exists():
        try:
            table = core_config.read_table(requested, table)
        except core_config.TomlConfigError as exc:
            raise JandocConfigError(str(exc)) from exc
        loaded_path = requested
    elif config_path is not None or _env_string(env_map, "CONFIG"):
        raise JandocConfigError(f"Config file not found: {requested}")

    command = _resolve_command(
        _pick_first(
            overrides.tool_command,
            _env_string(env_map, "TOOL"),
            table["tool"]["command"],
        )
    )
    name = table["tool"]["name"]
    if not isinstance(name, str) or not name.strip():
        name = _tool_name_for(command)

    config = JandocConfig(
        tool_command=command,
        tool_name=name.strip(),
        max_workers=_resolve_max_workers(
            _pick_first(
                overrides.max_workers,
                _env_string(env_map, "MAX_WORKERS"),
                table["execution"]["max_workers"],
            )
        ),
        log_level=_resolve_log_level(
            _pick_first(
                overrides.log_level,
                _env_string(env_map, "LOG_LEVEL"),
                table["logging"]["level"],
            )
        ),
        verbose=_resolve_bool(
            _pick_first(
                overrides.verbose,
                _env_string(env_map, "VERBOSE"),
                table["logging"]["verbose"],
            ),
            key="logging.verbose",
        ),
    )
    return LoadResult(config=config, layout=layout, config_path=loaded_path)


def default_config_text() -> str:
    """Return the packaged ``jandoc.toml`` template."""

    resource = resources.files("jandoc.convert").joinpath("template.toml")
    return resource.read_text(encoding="utf-8")


def write_default_config(path: Path, *, overwrite: bool = False) -> Path:
    try:
        return core_config.write_template(
            path, default_config_text(), overwrite=overwrite
        )
    except core_config.TomlConfigError as exc:
        raise JandocConfigError(str(exc)) from exc


def default_config_path(layout: workspace_mod.WorkspaceLayout) -> Path:
    return layout.path_for("config") / CONFIG_FILENAME


def _default_table() -> dict[str, Any]:
    return {
        "tool": {"command": _DEFAULT_COMMAND, "name": None},
        "execution": {"max_workers": _DEFAULT_MAX_WORKERS},
        "logging": {"level": _DEFAULT_LOG_LEVEL, "verbose": False},
    }


def _resolve_config_path(
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    layout: workspace_mod.WorkspaceLayout,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = _env_string(env_map, "CONFIG")
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_config_path(layout)


def _resolve_command(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise JandocConfigError("tool.command must be a non-empty string.")
    return value.strip()


def _tool_name_for(command: str) -> str:
    name = Path(command).name
    if name.lower().endswith(".exe"):
        name = name[: -len(".exe")]
    return name


def _resolve_max_workers(value: object) -> int:
    if isinstance(value, bool):
        raise JandocConfigError("execution.max_workers must be an integer.")
    try:
        workers = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise JandocConfigError(
            "execution.max_workers must be an integer."
        ) from exc
    if workers < 1:
        raise JandocConfigError("execution.max_workers must be at least 1.")
    return workers


def _resolve_log_level(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise JandocConfigError("logging.level must be a non-empty string.")
    return value.strip().upper()


def _resolve_bool(value: object, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
    raise JandocConfigError(f"{key} must be a boolean.")


def _env_string(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
