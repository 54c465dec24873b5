from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ohman.errors import ConfigError

DEFAULT_EXTENSIONS = ("pdf", "mobi", "mp4", "epub", "wav", "mp3")
DEFAULT_PATTERN = r"(.+)\s\((\d+)\)\.(pdf|mobi|mp4|epub|wav|mp3)$"
DEFAULT_RESULTS_FILE = "results.txt"

_CONFIG_KEYS = {"regex", "extensions", "out"}


class Policy(Enum):
    DRY_RUN = "dry-run"
    DELETE = "delete"
    INVERSE = "inverse"
    INVERSE_AND_RENAME = "inverse-and-rename"

    @property
    def deletes(self) -> bool:
        return self is not Policy.DRY_RUN


@dataclass(frozen=True)
class RunConfig:
    paths: tuple[str, ...]
    pattern: re.Pattern[str]
    policy: Policy = Policy.DRY_RUN
    out: str | None = None
    delete: bool = False

    @property
    def writes_results_file(self) -> bool:
        """Deleting runs, dry or not, always leave a results file behind."""
        return self.delete or self.policy.deletes


def build_pattern(extensions: list[str] | tuple[str, ...]) -> str:
    """Builds a `name (N).ext` pattern restricted to the given extensions."""
    if not extensions:
        msg = "at least one extension must be given"
        raise ConfigError(msg)
    alternatives = "|".join(re.escape(ext.lstrip(".")) for ext in extensions)
    return rf"(.+)\s\((\d+)\)\.({alternatives})$"


def compile_pattern(text: str) -> re.Pattern[str]:
    """
    Compiles a duplicate-matching pattern.

    The pattern must expose exactly three capture groups: the stem of the
    original name, the copy number and the extension.
    """
    try:
        pattern = re.compile(text)
    except re.error as err:
        msg = f"invalid regex: {err}"
        raise ConfigError(msg) from err

    if pattern.groups != 3:  # noqa: PLR2004 stem, number, extension
        msg = f"invalid regex: expected 3 capture groups, found {pattern.groups}"
        raise ConfigError(msg)

    return pattern


def select_policy(*, dry_run: bool, delete: bool, inverse: bool, inverse_and_rename: bool) -> Policy:
    """Resolves the mode flags into a single policy.

    Precedence is dry-run, then inverse-and-rename, inverse and delete. Nothing
    is mutated unless delete was requested.
    """
    if dry_run or not delete:
        return Policy.DRY_RUN
    if inverse_and_rename:
        return Policy.INVERSE_AND_RENAME
    if inverse:
        return Policy.INVERSE
    return Policy.DELETE


def load_config_file(config_path: str | None) -> dict[str, Any]:
    if not config_path:
        return {}

    try:
        with open(config_path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as err:
        msg = f"failed to read config file {config_path}: {err}"
        raise ConfigError(msg) from err

    if not isinstance(data, dict):
        msg = f"config file {config_path} must contain a JSON object"
        raise ConfigError(msg)

    unknown = set(data) - _CONFIG_KEYS
    if unknown:
        msg = f"unknown keys in config file {config_path}: {', '.join(sorted(unknown))}"
        raise ConfigError(msg)

    for key in ("regex", "out"):
        if key in data and not isinstance(data[key], str):
            msg = f"'{key}' in config file {config_path} must be a string"
            raise ConfigError(msg)

    extensions = data.get("extensions")
    if extensions is not None and not (
        isinstance(extensions, list) and all(isinstance(ext, str) for ext in extensions)
    ):
        msg = f"'extensions' in config file {config_path} must be a list of strings"
        raise ConfigError(msg)

    return data


def make_run_config(
    paths: list[str],
    *,
    policy: Policy,
    regex: str | None = None,
    out: str | None = None,
    config_path: str | None = None,
    delete: bool = False,
) -> RunConfig:
    """Merges command line values over the optional config file."""
    if not paths:
        msg = "at least one path must be specified"
        raise ConfigError(msg)

    file_values = load_config_file(config_path)

    if regex is None:
        regex = file_values.get("regex")
    if regex is None and "extensions" in file_values:
        regex = build_pattern(file_values["extensions"])
    if regex is None:
        regex = DEFAULT_PATTERN

    if out is None:
        out = file_values.get("out")

    return RunConfig(
        paths=tuple(paths), pattern=compile_pattern(regex), policy=policy, out=out, delete=delete
    )
