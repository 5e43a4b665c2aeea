"""Command-line entry point for scrypt-cli.

Usage::

    scrypt project my-app
    scrypt project my-lib --library
    scrypt project my-counter --stateful
    scrypt system
"""

from __future__ import annotations

import argparse
import asyncio
import platform
import sys
from pathlib import Path

from pydantic import ValidationError

from . import __version__
from .config import Config
from .scaffolder import ProjectScaffolder, ProjectVariant
from .utils import console, print_error, print_summary_table, tool_version

BANNER = r"""
  ___  / __|  _ _   _  _   _ __  | |_
 (_-< | (__  | '_| | || | | '_ \ |  _|
 /__/  \___| |_|    \_, | | .__/  \__|
                    |__/  |_|

             sCrypt CLI
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scrypt",
        usage="%(prog)s <command> [options]",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=BANNER,
    )
    parser.add_argument("-v", "--version", action="version", version=__version__)

    sub = parser.add_subparsers(dest="command", metavar="<command>")

    project = sub.add_parser(
        "project",
        aliases=["proj", "p"],
        help="Create a new smart contract project",
    )
    project.add_argument("name", help="Name of the project directory to create")
    project.add_argument(
        "--stateful", "--state",
        action="store_true",
        help="Create stateful smart contract project.",
    )
    project.add_argument(
        "--library", "--lib",
        action="store_true",
        help="Create library project.",
    )
    project.add_argument(
        "--keep-partial",
        action="store_true",
        help="Keep the partially created directory if a step fails.",
    )
    project.add_argument(
        "--ref",
        default=None,
        help="Template repository branch or tag (default: main)",
    )

    sub.add_parser("system", aliases=["sys", "s"], help="Show system info")
    sub.add_parser("version", help="Show version")
    return parser


def _variant(args: argparse.Namespace) -> ProjectVariant:
    if args.stateful:
        return ProjectVariant.STATEFUL_CONTRACT
    if args.library:
        return ProjectVariant.LIBRARY
    return ProjectVariant.CONTRACT


async def _system_info() -> dict[str, str]:
    info = {
        "Platform": f"{platform.system()} {platform.release()}",
        "Python": platform.python_version(),
        "scrypt-cli": __version__,
    }
    for label, executable in (("Git", "git"), ("Node", "node"), ("npm", "npm")):
        info[label] = await tool_version(executable) or "not found"
    return info


def run_project(args: argparse.Namespace, config: Config | None = None) -> int:
    """Scaffold the requested project and return the process exit code."""
    overrides: dict = {}
    if args.keep_partial:
        overrides["keep_partial"] = True
    if args.ref:
        overrides["template_ref"] = args.ref
    config = config or Config.from_env(base_dir=Path("."), **overrides)

    try:
        outcome = asyncio.run(ProjectScaffolder(config).scaffold(_variant(args), args.name))
    except ValidationError as exc:
        print_error(f"Invalid project request: {exc.errors()[0]['msg']}")
        return 1
    return outcome.exit_code


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``scrypt`` and ``python -m scrypt_cli.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command in ("project", "proj", "p"):
        sys.exit(run_project(args))
    if args.command in ("system", "sys", "s"):
        print_summary_table(asyncio.run(_system_info()), title="System Info")
        sys.exit(0)
    if args.command == "version":
        console.print(__version__)
        sys.exit(0)

    parser.print_help()
    print_error("Please provide a command.")
    sys.exit(1)


if __name__ == "__main__":
    main()
