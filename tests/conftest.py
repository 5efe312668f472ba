"""Pytest configuration and fixtures for ClassTree CLI tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator

import pytest

from classtree_cli.config import ScanSettings
from classtree_cli.file_index import FileIndex


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path_factory, monkeypatch):
    """Point the TOML config at an empty temporary home for every test.

    ``config_manager`` binds the paths at import time, so both modules are
    patched.
    """
    home = tmp_path_factory.mktemp("classtree_home")
    config_file = home / "config.toml"
    monkeypatch.setattr("classtree_cli.config.BASE_DIR", home)
    monkeypatch.setattr("classtree_cli.config.CONFIG_FILE", config_file)
    monkeypatch.setattr("classtree_cli.config_manager.BASE_DIR", home)
    monkeypatch.setattr("classtree_cli.config_manager.CONFIG_FILE", config_file)
    return config_file


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp()).resolve()
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sample_project_path() -> Path:
    """Get path to the sample LWC project."""
    return (Path(__file__).parent / "fixtures" / "sample_lwc").resolve()


@pytest.fixture
def lwc_dir(sample_project_path: Path) -> Path:
    return sample_project_path / "force-app" / "main" / "default" / "lwc"


@pytest.fixture
def write_files(temp_dir: Path) -> Callable[[Dict[str, str]], Path]:
    """Write ``{relative_path: text}`` into the temp dir and return the root."""

    def _write(files: Dict[str, str]) -> Path:
        for rel, text in files.items():
            path = temp_dir / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return temp_dir

    return _write


@pytest.fixture
def make_index() -> Callable[..., FileIndex]:
    def _make(root: Path, settings: ScanSettings = None) -> FileIndex:
        return FileIndex(root, settings or ScanSettings())

    return _make
