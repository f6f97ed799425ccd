# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for clawbuild.

A single command with no required arguments. Run it from the project and it
builds a release binary for the host:

    clawbuild
    clawbuild --backend cuda
    clawbuild --config clawbuild.yaml --dry-run
    clawbuild --list-backends
"""

import argparse
import sys

from clawbuild import __version__
from clawbuild.cli.commands import handle_build
from clawbuild.driver.platforms import AccelerationBackend


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clawbuild",
        description="Build a release clawrs executable for this machine.",
    )
    parser.add_argument(
        "--backend",
        type=str.lower,
        default=None,
        choices=[backend.value for backend in AccelerationBackend],
        help="Force an acceleration backend instead of the platform default.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file.",
    )
    parser.add_argument(
        "--project-dir",
        type=str,
        default=None,
        dest="project_dir",
        help="Directory containing Cargo.toml (overrides the config file).",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Diagnostic log verbosity (default: from config, else WARNING).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        dest="dry_run",
        help="Print the toolchain command without running it.",
    )
    parser.add_argument(
        "--list-backends",
        action="store_true",
        default=False,
        dest="list_backends",
        help="List the backends available on this machine and exit.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.set_defaults(func=handle_build)
    return parser


def main() -> None:
    """
    Main CLI entrypoint. This is what pyproject.toml's [project.scripts] points to.

    Parses the command line, hands off to the build handler, and exits with
    whatever code it returns.
    """
    args = build_parser().parse_args()
    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
