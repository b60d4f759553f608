# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for packcheck.

Usage:
    packcheck verify --project-dir path/to/project --platform linux
    packcheck verify --project-dir app --platform win --arch x64 --config harness.yaml
    packcheck info
"""

import argparse
import sys

from packcheck.cli.commands import handle_info, handle_verify
from packcheck.cli.exit_codes import USER_ERROR


def _build_global_parser() -> argparse.ArgumentParser:
    """Options shared by every subcommand."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML harness configuration file.",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level. Overrides log_level from --config.",
    )
    return parent


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    verify_parser = subparsers.add_parser(
        "verify",
        parents=[parent],
        help="Validate the artifacts in a project's dist directory.",
    )
    verify_parser.add_argument(
        "--project-dir",
        type=str,
        required=True,
        dest="project_dir",
        help="Project whose dist/ holds the packaged artifacts.",
    )
    verify_parser.add_argument(
        "--platform",
        action="append",
        default=None,
        dest="platforms",
        help="Platform to validate (mac, linux, win, current, all). Repeatable.",
    )
    verify_parser.add_argument(
        "--arch",
        type=str,
        default=None,
        choices=["ia32", "x64"],
        help="Restrict to one architecture.",
    )
    verify_parser.add_argument(
        "--target",
        action="append",
        default=None,
        help="Artifact-target filter the build used. Repeatable.",
    )
    verify_parser.add_argument(
        "--options",
        type=str,
        default=None,
        help="YAML BuildOptions document. Command-line flags override its values.",
    )
    verify_parser.set_defaults(func=handle_verify)

    info_parser = subparsers.add_parser(
        "info",
        parents=[parent],
        help="Display platform, CI build number and tool availability.",
    )
    info_parser.set_defaults(func=handle_info)


def main() -> None:
    """Entry point referenced by [project.scripts] in pyproject.toml."""
    parent = _build_global_parser()

    root_parser = argparse.ArgumentParser(
        prog="packcheck",
        description="packcheck: verify cross-platform packaging output.",
        parents=[parent],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, parent)

    args = root_parser.parse_args()

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
