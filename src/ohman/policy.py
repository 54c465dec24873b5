from __future__ import annotations

import logging
from pathlib import Path

from ohman.config import Policy

logger = logging.getLogger(__name__)


def _delete(path: Path, results: list[str]) -> None:
    try:
        path.unlink()
    except OSError as err:
        logger.warning("Failed to delete %s: %s", path, err)
        results.append(f"Failed to delete {path}: {err}")
    else:
        results.append(f"Deleted {path}")


def _rename(path: Path, new_path: Path, results: list[str]) -> None:
    try:
        path.rename(new_path)
    except OSError as err:
        logger.warning("Failed to rename %s to %s: %s", path, new_path, err)
        results.append(f"Failed to rename {path} to {new_path}: {err}")
    else:
        results.append(f"Renamed {path} to {new_path}")


def _mtime(path: Path) -> int:
    try:
        return path.stat().st_mtime_ns
    except OSError:
        return -1


def newest_first(paths: list[Path]) -> list[Path]:
    """Sorts paths by modification time, newest first. Equal times keep their order."""
    return sorted(paths, key=_mtime, reverse=True)


def list_group(original: Path, duplicates: list[Path]) -> list[str]:
    results = [f"Original: {original}"]
    results.extend(f"  - Duplicate: {duplicate}" for duplicate in duplicates)
    return results


def delete_duplicates(duplicates: list[Path]) -> list[str]:
    """Removes every numbered copy and leaves the original alone."""
    results: list[str] = []
    for duplicate in dict.fromkeys(duplicates):
        _delete(duplicate, results)
    return results


def keep_newest(original: Path, duplicates: list[Path], *, rename: bool) -> list[str]:
    """
    Keeps the most recently modified copy and deletes the other copies along
    with the original.

    Args:
        original: Path of the original file.
        duplicates: The numbered copies of original. Repeated entries are
                    treated as one file.
        rename: If True, the kept copy takes over the original's name.

    Returns:
        One result line per delete or rename attempt, plus a line naming the
        kept file when it is not renamed.
    """
    newest, *older = newest_first(list(dict.fromkeys(duplicates)))

    results: list[str] = []
    for path in [*older, original]:
        if path == newest:
            continue
        _delete(path, results)

    if rename:
        _rename(newest, original, results)
    else:
        results.append(f"Kept newest file: {newest}")

    return results


def apply_policy(groups: dict[Path, list[Path]], policy: Policy) -> list[str]:
    """
    Applies the policy to every group whose original exists as a regular file.

    Groups without an existing original produce no output and are never touched.
    """
    results: list[str] = []

    for original, duplicates in groups.items():
        if not duplicates:
            continue

        if not original.is_file():
            logger.debug("Skipping %s: original does not exist", original)
            continue

        if policy is Policy.DRY_RUN:
            results.extend(list_group(original, duplicates))
        elif policy is Policy.DELETE:
            results.extend(delete_duplicates(duplicates))
        else:
            results.extend(keep_newest(original, duplicates, rename=policy is Policy.INVERSE_AND_RENAME))

    return results
