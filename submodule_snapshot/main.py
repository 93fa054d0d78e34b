"""Main CLI entry point for submodule-snapshot.

Provides commands: submit, export
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from submodule_snapshot import __version__
from submodule_snapshot.cli.export import export_command
from submodule_snapshot.cli.submit import submit_command


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] %(message)s",
        handlers=[handler],
        force=True,
    )
    # Keep HTTP client chatter out of normal runs.
    logging.getLogger("urllib3").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _add_snapshot_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by every command that builds a snapshot."""
    parser.add_argument(
        "-m",
        "--manifest",
        help="Path to the .gitmodules manifest (default: INPUT_MANIFEST or .gitmodules)",
    )
    parser.add_argument(
        "-D",
        "--development-deps",
        help=(
            "Comma-separated submodule or repository names to report with the "
            "development scope (default: INPUT_DEVELOPMENT-DEPS)"
        ),
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Optional TOML/JSON configuration file",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        help="Maximum concurrent git invocations (default: 8)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="submodule-snapshot",
        description="Submodule-snapshot - Git submodule dependency submission",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    submit_parser = subparsers.add_parser(
        "submit",
        help="Build the submodule dependency snapshot and submit it to GitHub",
    )
    _add_snapshot_arguments(submit_parser)
    submit_parser.add_argument(
        "--token",
        help="Token for the submission API (default: INPUT_TOKEN or GITHUB_TOKEN)",
    )
    submit_parser.add_argument(
        "--repository",
        help="Target repository as owner/name (default: GITHUB_REPOSITORY)",
    )
    submit_parser.add_argument("--sha", help="Commit SHA (default: GITHUB_SHA)")
    submit_parser.add_argument("--ref", help="Git ref (default: GITHUB_REF)")
    submit_parser.add_argument(
        "-o",
        "--output",
        help="Also write the snapshot payload to this JSON file",
    )
    submit_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Build the snapshot but do not submit it",
    )

    export_parser = subparsers.add_parser(
        "export",
        help="Build the submodule dependency snapshot and write it to a JSON file",
    )
    _add_snapshot_arguments(export_parser)
    export_parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output JSON file",
    )
    export_parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not print the dependency table",
    )

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command == "submit":
        return submit_command(args)
    elif args.command == "export":
        return export_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
