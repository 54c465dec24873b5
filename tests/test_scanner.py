from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from conftest import create_file

from ohman.config import DEFAULT_PATTERN, compile_pattern
from ohman.errors import ScanError
from ohman.scanner import find_duplicates, walk_files

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def pattern():
    return compile_pattern(DEFAULT_PATTERN)


def test_walk_files_skips_directories(tmp_path: Path):
    create_file(tmp_path / "b.pdf")
    create_file(tmp_path / "a.pdf")
    create_file(tmp_path / "sub" / "c.pdf")
    (tmp_path / "empty").mkdir()

    found = list(walk_files(str(tmp_path)))

    assert found == [tmp_path / "a.pdf", tmp_path / "b.pdf", tmp_path / "sub" / "c.pdf"]


def test_walk_files_single_file_root(tmp_path: Path):
    book = create_file(tmp_path / "book (1).pdf")

    assert list(walk_files(str(book))) == [book]


def test_walk_files_missing_root(tmp_path: Path):
    missing = str(tmp_path / "nonexistent")
    with pytest.raises(ScanError, match="error walking path") as exc_info:
        list(walk_files(missing))
    assert exc_info.value.root == missing


def test_find_duplicates_groups_by_original(book_dir: Path, pattern):
    create_file(book_dir / "other.pdf")

    groups = find_duplicates([str(book_dir)], pattern)

    assert groups == {book_dir / "book.pdf": [book_dir / "book (1).pdf", book_dir / "book (2).pdf"]}


def test_find_duplicates_without_original(tmp_path: Path, pattern):
    create_file(tmp_path / "orphan (1).mp3")

    groups = find_duplicates([str(tmp_path)], pattern)

    assert groups == {tmp_path / "orphan.mp3": [tmp_path / "orphan (1).mp3"]}


def test_find_duplicates_keeps_directories_apart(tmp_path: Path, pattern):
    create_file(tmp_path / "a" / "song (1).wav")
    create_file(tmp_path / "b" / "song (1).wav")

    groups = find_duplicates([str(tmp_path)], pattern)

    assert set(groups) == {tmp_path / "a" / "song.wav", tmp_path / "b" / "song.wav"}


def test_find_duplicates_merges_roots(tmp_path: Path, pattern):
    create_file(tmp_path / "one" / "book (1).epub")
    create_file(tmp_path / "two" / "movie (1).mp4")

    groups = find_duplicates([str(tmp_path / "one"), str(tmp_path / "two")], pattern)

    assert len(groups) == 2


@pytest.mark.parametrize("second_root", ["", os.sep, f"{os.sep}.", f"{os.sep}sub{os.sep}.."])
def test_find_duplicates_overlapping_roots_record_once(book_dir: Path, pattern, second_root: str):
    (book_dir / "sub").mkdir()

    groups = find_duplicates([str(book_dir), f"{book_dir}{second_root}"], pattern)

    assert groups == {book_dir / "book.pdf": [book_dir / "book (1).pdf", book_dir / "book (2).pdf"]}


def test_find_duplicates_nested_roots_record_once(tmp_path: Path, pattern):
    nested = tmp_path / "a" / "b"
    create_file(nested / "book (1).pdf")

    groups = find_duplicates([str(tmp_path), str(nested)], pattern)

    assert groups == {nested / "book.pdf": [nested / "book (1).pdf"]}


def test_find_duplicates_relative_root(book_dir: Path, pattern, monkeypatch):
    monkeypatch.chdir(book_dir)

    groups = find_duplicates(["."], pattern)

    assert groups == {book_dir / "book.pdf": [book_dir / "book (1).pdf", book_dir / "book (2).pdf"]}


def test_find_duplicates_ignores_unsupported_extensions(tmp_path: Path, pattern):
    create_file(tmp_path / "notes.txt")
    create_file(tmp_path / "notes (1).txt")

    assert find_duplicates([str(tmp_path)], pattern) == {}


def test_find_duplicates_aborts_on_bad_root(tmp_path: Path, pattern):
    create_file(tmp_path / "book (1).pdf")

    with pytest.raises(ScanError):
        find_duplicates([str(tmp_path), str(tmp_path / "nonexistent")], pattern)


def test_find_duplicates_aborts_on_unreadable_subdirectory(tmp_path: Path, pattern, monkeypatch):
    create_file(tmp_path / "book (1).pdf")
    locked = tmp_path / "locked"
    create_file(locked / "song (1).mp3")

    real_scandir = os.scandir

    def scandir(path="."):
        if os.fspath(path) == str(locked):
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)

    groups = None
    with pytest.raises(ScanError, match="Permission denied") as exc_info:
        groups = find_duplicates([str(tmp_path)], pattern)

    assert exc_info.value.root == str(tmp_path)
    assert isinstance(exc_info.value.cause, PermissionError)
    assert groups is None
