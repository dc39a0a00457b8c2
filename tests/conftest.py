"""Shared test fixtures for hbs tests."""

from pathlib import Path
from typing import Callable

import pytest

from hbs_cli.core.registry import TemplateRegistry

WriteFile = Callable[[Path, str], Path]


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Use an empty temporary directory as the working directory."""
    monkeypatch.chdir(tmp_path)
    for name in ("HBS_OUTPUT", "HBS_EXTENSION", "HBS_DEBUG", "HBS_FILE_MODE"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def registry() -> TemplateRegistry:
    return TemplateRegistry()


@pytest.fixture
def write_file() -> WriteFile:
    """Return a function writing text to a path, creating parent directories."""

    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
