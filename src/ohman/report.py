from __future__ import annotations

# ruff: noqa: T201 `print` found
import sys

from ohman.config import DEFAULT_RESULTS_FILE
from ohman.errors import OutputError


def _printable(text: str) -> str:
    """Escapes what the console cannot encode, such as undecodable bytes of a filename."""
    encoding = sys.stdout.encoding or "utf-8"
    return text.encode(encoding, "backslashreplace").decode(encoding)


def write_results(destination: str, text: str) -> None:
    """
    Writes text to destination, replacing any previous content.

    Filenames that were not valid UTF-8 are written back as their original bytes.
    """
    try:
        with open(destination, "w", encoding="utf-8", errors="surrogateescape") as f:
            f.write(text)
    except OSError as err:
        raise OutputError(destination, err) from err

    print(_printable(f"Results written to {destination}"))


def report_results(results: list[str], *, out: str | None = None, deleting: bool = False) -> str | None:
    """
    Emits the result lines of a run.

    Args:
        results: Result lines in the order they were produced.
        out: Explicit destination file.
        deleting: Whether the run was configured to delete files. Such runs
                  always leave a results file behind, `results.txt` in the
                  working directory unless out is given.

    Returns:
        The path the results were written to, or None if they were printed.
    """
    text = "\n".join(results)

    destination = out or (DEFAULT_RESULTS_FILE if deleting else None)
    if destination:
        write_results(destination, text)
        return destination

    print(_printable(text))
    return None
