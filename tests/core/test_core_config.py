from __future__ import annotations

import pytest

from jandoc.core import config as core_config

DEFAULTS = {"tool": {"command": "pandoc", "name": None}, "level": "INFO"}


def test_read_table_lays_file_over_defaults(tmp_path):
    path = tmp_path / "conf.toml"
    path.write_text('[tool]\ncommand = "/opt/pandoc"\n', encoding="utf-8")

    assert core_config.read_table(path, DEFAULTS) == {
        "tool": {"command": "/opt/pandoc", "name": None},
        "level": "INFO",
    }
    assert DEFAULTS["tool"]["command"] == "pandoc"


def test_read_table_missing_file(tmp_path):
    with pytest.raises(core_config.TomlConfigError, match="not found"):
        core_config.read_table(tmp_path / "absent.toml", DEFAULTS)


def test_read_table_invalid_document(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text("[tool\ncommand = ", encoding="utf-8")

    with pytest.raises(core_config.TomlConfigError, match="Invalid TOML"):
        core_config.read_table(path, DEFAULTS)


def test_overlay_copies_untouched_tables():
    merged = core_config.overlay(DEFAULTS, {"level": "DEBUG"})

    merged["tool"]["command"] = "changed"

    assert merged["level"] == "DEBUG"
    assert DEFAULTS["tool"]["command"] == "pandoc"


def test_overlay_rejects_unknown_key():
    with pytest.raises(core_config.TomlConfigError, match="tool.binary"):
        core_config.overlay(DEFAULTS, {"tool": {"binary": "x"}})


def test_overlay_rejects_scalar_for_table():
    with pytest.raises(core_config.TomlConfigError, match="Expected table"):
        core_config.overlay(DEFAULTS, {"tool": "pandoc"})


def test_write_template_respects_overwrite(tmp_path):
    target = tmp_path / "nested" / "conf.toml"

    written = core_config.write_template(target, "a = 1\n")
    assert written == target
    assert target.read_text(encoding="utf-8") == "a = 1\n"

    with pytest.raises(core_config.TomlConfigError, match="already exists"):
        core_config.write_template(target, "a = 2\n")
    assert target.read_text(encoding="utf-8") == "a = 1\n"

    core_config.write_template(target, "a = 2\n", overwrite=True)
    assert target.read_text(encoding="utf-8") == "a = 2\n"
