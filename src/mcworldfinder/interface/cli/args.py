from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the raw argparse
namespace into configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict

from mcworldfinder.domain.config import DEFAULT_WORKERS
from mcworldfinder.domain.constants import APP_NAME, APP_VERSION
from mcworldfinder.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the mcworldfinder CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description=i18n.t("app.description"),
    )

    # --- Search Scope ---
    p.add_argument(
        "folders",
        metavar="FOLDER",
        nargs="*",
        help=i18n.t("cli.args.folders"),
    )
    p.add_argument(
        "--exhaustive",
        action="store_true",
        help=i18n.t("cli.args.exhaustive"),
    )
    p.add_argument(
        "--no-follow-symlinks",
        action="store_true",
        help=i18n.t("cli.args.no_follow_symlinks"),
    )

    # --- Execution ---
    p.add_argument(
        "-j", "--workers",
        type=int,
        default=None,
        help=i18n.t("cli.args.workers", workers=DEFAULT_WORKERS),
    )

    # --- Output ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help=i18n.t("cli.args.json"),
    )
    p.add_argument(
        "--no-summary",
        action="store_true",
        help=i18n.t("cli.args.no_summary"),
    )

    # --- Diagnostics ---
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help=i18n.t("cli.args.log_file"),
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help=i18n.t("cli.args.dump_config"),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug"),
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
        help=i18n.t("cli.args.version"),
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Only values the user actually set are returned, so defaults stay owned
    by the domain configuration.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.folders:
        overrides["roots"] = list(args.folders)
    if args.exhaustive:
        overrides["exhaustive"] = True
    if args.no_follow_symlinks:
        overrides["follow_symlinks"] = False

    if args.workers is not None:
        overrides["workers"] = args.workers

    if args.json_output:
        overrides["output_format"] = "json"
    if args.no_summary:
        overrides["show_summary"] = False

    if args.log_file:
        overrides["log_file"] = args.log_file
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
