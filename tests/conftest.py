from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


def create_file(path: Path, content: str = "", mtime: float | None = None) -> Path:
    """Creates a file, optionally with a fixed modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def book_dir(tmp_path: Path) -> Path:
    """A directory with book.pdf and two numbered copies, book (2).pdf being the newest."""
    create_file(tmp_path / "book.pdf", "original content", mtime=1_000_000)
    create_file(tmp_path / "book (1).pdf", "duplicate 1", mtime=2_000_000)
    create_file(tmp_path / "book (2).pdf", "duplicate 2", mtime=3_000_000)
    return tmp_path
