# tests/conftest.py
"""Shared fixtures and helpers for the repo-inspector test suite."""
import os
from pathlib import Path
from typing import Dict, Union

import pytest

from repo_inspector.cli.console_logger import ConsoleLogger


def create_project_structure(base_path: Path, files_to_create: Dict[str, Union[str, bytes, None]]):
    """
    Creates a directory structure with files.
    files_to_create = {"dir/file.ts": "content", "blob.bin": b"\\x00\\x01"}
    """
    for rel_path, content in files_to_create.items():
        file_path = base_path / rel_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            file_path.write_bytes(content)
        else:
            file_path.write_text(content or f"content of {rel_path}")


def make_symlink_or_skip(target: Path, link: Path, target_is_directory: bool = False):
    try:
        os.symlink(target, link, target_is_directory=target_is_directory)
    except (OSError, NotImplementedError) as e:
        pytest.skip(f"symlinks not supported here: {e}")


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    proj_dir = tmp_path / "repo"
    proj_dir.mkdir()
    return proj_dir


@pytest.fixture
def quiet_logger() -> ConsoleLogger:
    return ConsoleLogger(colors_enabled=False, timestamps=False)
