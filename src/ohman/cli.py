from __future__ import annotations

# ruff: noqa: T201 `print` found
import argparse
import logging
import sys

from ohman.config import DEFAULT_RESULTS_FILE, Policy, make_run_config, select_policy
from ohman.errors import ConfigError, OhmanError
from ohman.log import setup_logging
from ohman.policy import apply_policy
from ohman.report import report_results
from ohman.scanner import find_duplicates

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

_DESCRIPTION = """\
Finds numbered copies of files, such as 'book (1).pdf', and lists or removes them.

WARNING: This tool deletes files permanently. USE AT YOUR OWN RISK.
This software is provided "as-is", without warranty of any kind.
Always backup your files and test with --dry-run first.
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ohman",
        description=_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "paths",
        nargs="+",
        metavar="path",
        help="Path(s) to search for duplicates.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="[SAFE MODE] List duplicate files without making changes. Takes precedence over every other mode.",
    )
    parser.add_argument(
        "--delete",
        action="store_true",
        help="WARNING: Permanently delete duplicate files. Required by --inverse and --inverse-and-rename.",
    )
    parser.add_argument(
        "--inverse",
        action="store_true",
        help="Keep only the newest file of each group and delete the others, including the original.",
    )
    parser.add_argument(
        "--inverse-and-rename",
        action="store_true",
        help="Like --inverse, then rename the newest file to the original's name.",
    )
    parser.add_argument(
        "-o",
        "--out",
        help=f"Output file for results. Deleting runs default to {DEFAULT_RESULTS_FILE}.",
    )
    parser.add_argument(
        "--regex",
        help="Custom regex with 3 groups (stem, number, extension). Test with --dry-run first!",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to a JSON file with default 'regex', 'extensions' or 'out' values.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr. Repeat for debug output.",
    )
    return parser


def run(
    paths: list[str],
    *,
    policy: Policy = Policy.DRY_RUN,
    regex: str | None = None,
    out: str | None = None,
    config_path: str | None = None,
    delete: bool = False,
) -> list[str]:
    """Scans paths, applies the policy and reports the results."""
    config = make_run_config(paths, policy=policy, regex=regex, out=out, config_path=config_path, delete=delete)
    logger.info("Running in %s mode", config.policy.value)

    groups = find_duplicates(config.paths, config.pattern)
    results = apply_policy(groups, config.policy)
    report_results(results, out=config.out, deleting=config.writes_results_file)
    return results


def main(argv: list[str] | None = None) -> int:
    """
    Main function to parse arguments and run the duplicate finder.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    policy = select_policy(
        dry_run=args.dry_run,
        delete=args.delete,
        inverse=args.inverse,
        inverse_and_rename=args.inverse_and_rename,
    )

    try:
        run(
            args.paths,
            policy=policy,
            regex=args.regex,
            out=args.out,
            config_path=args.config,
            delete=args.delete,
        )
    except ConfigError as err:
        parser.error(str(err))
    except OhmanError as err:
        print(f"ohman: error: {err}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
