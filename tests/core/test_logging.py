from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from jandoc.core import logging as core_logging


@pytest.fixture
def cleanup_logger():
    names: list[str] = []
    yield names.append
    for name in names:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


def test_configure_logger_writes_json(tmp_path, cleanup_logger):
    cleanup_logger("jandoc.test_json")
    logger, log_path = core_logging.configure_logger(
        "jandoc.test_json", log_dir=tmp_path / "logs", level="INFO"
    )

    logger.info(
        "converted",
        extra={"source": Path("in/a.md"), "outputs": ("out/a.md",)},
    )
    logger.debug("hidden at INFO")
    try:
        raise ValueError("boom")
    except ValueError:
        logger.exception("failed", extra={"obj": object()})
    for handler in logger.handlers:
        handler.flush()

    assert log_path == tmp_path / "logs" / "test_json.log"
    lines = log_path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["message"] == "converted"
    assert first["level"] == "INFO"
    assert first["extra"] == {"source": "in/a.md", "outputs": ["out/a.md"]}
    last = json.loads(lines[-1])
    assert "ValueError: boom" in last["exception"]
    assert last["extra"]["obj"].startswith("<object")


def test_configure_logger_reuses_handlers(tmp_path, cleanup_logger):
    cleanup_logger("jandoc.test_reuse")
    first, _ = core_logging.configure_logger(
        "jandoc.test_reuse", log_dir=tmp_path / "logs"
    )
    second, _ = core_logging.configure_logger(
        "jandoc.test_reuse", log_dir=tmp_path / "logs"
    )

    assert first is second
    assert len(second.handlers) == 1


def test_configure_logger_toggles_console_handler(tmp_path, cleanup_logger):
    cleanup_logger("jandoc.test_console")

    logger, _ = core_logging.configure_logger(
        "jandoc.test_console", log_dir=tmp_path / "logs", verbose=True
    )
    assert any(
        getattr(handler, "_jandoc_console", False) for handler in logger.handlers
    )

    logger, _ = core_logging.configure_logger(
        "jandoc.test_console", log_dir=tmp_path / "logs", verbose=False
    )
    assert not any(
        getattr(handler, "_jandoc_console", False) for handler in logger.handlers
    )


def test_unknown_level_falls_back_to_info(tmp_path, cleanup_logger):
    cleanup_logger("jandoc.test_level")
    logger, _ = core_logging.configure_logger(
        "jandoc.test_level", log_dir=tmp_path / "logs", level="chatty"
    )

    assert logger.handlers[0].level == logging.INFO
