from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator
from pathlib import Path

from ohman.errors import ScanError

logger = logging.getLogger(__name__)


def canonical_path(path: str | Path) -> Path:
    """Absolute, normalized form of path. Symlinks are left unresolved."""
    return Path(os.path.abspath(path))


def walk_files(root: str | Path) -> Iterator[Path]:
    """Recursively yields every non-directory entry under root, in sorted order."""
    root_path = Path(root)
    if root_path.is_file():
        yield root_path
        return

    def _raise(err: OSError) -> None:
        raise ScanError(str(root), err)

    for dirpath, dirnames, filenames in os.walk(os.fspath(root_path), onerror=_raise):
        dirnames.sort()
        for filename in sorted(filenames):
            yield Path(dirpath) / filename


def original_path(path: Path, match: re.Match[str]) -> Path:
    """Path of the file a numbered copy was made from: `<dir>/<stem>.<ext>`."""
    stem = match.group(1) or ""
    extension = match.group(3) or ""
    return path.with_name(f"{stem}.{extension}")


def find_duplicates(roots: list[str] | tuple[str, ...], pattern: re.Pattern[str]) -> dict[Path, list[Path]]:
    """
    Groups numbered copies by the path of their inferred original.

    Args:
        roots: Directories to search recursively. Results of all roots are merged;
               a file reachable from several roots is recorded once.
        pattern: Compiled pattern with three groups (stem, number, extension),
                 applied to the filename only.

    Returns:
        A mapping of canonical original path to the matching files, in walk order.
        The original is not required to exist.

    Raises:
        ScanError: If any root, or a directory below it, cannot be read.
    """
    groups: dict[Path, list[Path]] = {}
    seen: set[str] = set()

    for root in roots:
        logger.info("Scanning %s", root)
        for found in walk_files(root):
            match = pattern.search(found.name)
            if not match:
                continue

            path = canonical_path(found)
            real = os.path.realpath(path)
            if real in seen:
                logger.debug("%s was already recorded", path)
                continue
            seen.add(real)

            original = original_path(path, match)
            logger.debug("%s looks like a copy of %s", path, original)
            groups.setdefault(original, []).append(path)

    logger.info("Found %d candidate groups", len(groups))
    return groups
