from __future__ import annotations

import sys
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).resolve().parent
ROOT = TESTS_DIR.parent
for extra in (TESTS_DIR, ROOT / "src"):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from fixtures import FakeTool, TreeBuilder  # noqa: E402


@pytest.fixture
def tree(tmp_path: Path) -> TreeBuilder:
    """Build input/output trees under pytest's per-test tmp directory."""

    return TreeBuilder(tmp_path)


@pytest.fixture
def fake_tool() -> FakeTool:
    """A conversion tool stand-in that copies input text to the output."""

    return FakeTool()


@pytest.fixture(autouse=True)
def _isolated_workspace(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    home = tmp_path_factory.mktemp("jandoc-home")
    monkeypatch.setenv("JANDOC_HOME", str(home))
    for key in ("JANDOC_CONFIG", "JANDOC_TOOL", "JANDOC_MAX_WORKERS",
                "JANDOC_LOG_LEVEL", "JANDOC_VERBOSE"):
        monkeypatch.delenv(key, raising=False)
