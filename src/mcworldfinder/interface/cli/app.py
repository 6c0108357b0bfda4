from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, configuration merging and
validation, logging bootstrap, the search itself, and result rendering.
World paths go to stdout; warnings and the summary go to stderr so the
output stays pipeable.
"""

import json
import sys
import threading
from typing import Any, Dict, List, Optional

from mcworldfinder.core.services.finder import WorldSearch, find_worlds
from mcworldfinder.core.services.validator import validate_config
from mcworldfinder.domain import constants as const
from mcworldfinder.domain.config import get_default_config
from mcworldfinder.domain.world_models import NoRootsAvailableError, WorldDirectory
from mcworldfinder.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_logger,
    shutdown_logging,
)
from mcworldfinder.interface.cli import args as cli_args
from mcworldfinder.utils.i18n import i18n

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (see domain.constants).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Merge overrides and validate
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(get_default_config(), overrides)
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console stderr, optional rotating file)
    configure_logging(LoggingConfig.from_settings(clean_conf))

    try:
        for w in warnings:
            logger.warning(f"Configuration Constraint: {w}")

        if args.dump_config:
            print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
            return const.EXIT_OK

        return _run_search(clean_conf)
    finally:
        shutdown_logging()

# -----------------------------------------------------------------------------
# SEARCH EXECUTION
# -----------------------------------------------------------------------------

def _run_search(config: Dict[str, Any]) -> int:
    """Run the search, stream results and map failures to exit codes."""
    cancellation_event = threading.Event()

    try:
        search = find_worlds(config, cancellation_event=cancellation_event)
    except NoRootsAvailableError as e:
        logger.error(i18n.t("cli.errors.no_roots", error=str(e)))
        return const.EXIT_NO_ROOTS

    as_json = config["output_format"] == "json"
    worlds: List[WorldDirectory] = []

    try:
        for world in search:
            worlds.append(world)
            if not as_json:
                print(world.path, flush=True)
    except KeyboardInterrupt:
        cancellation_event.set()
        logger.warning(i18n.t("cli.status.interrupted"))
        return const.EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(i18n.t("cli.errors.search_fail", error=str(e)), exc_info=True)
        return const.EXIT_FAILURE

    if as_json:
        print(json.dumps(_build_report(search, worlds), ensure_ascii=False, indent=2))
    elif config["show_summary"]:
        _print_human_summary(search)

    return const.EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of known override keys into the base configuration.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _build_report(search: WorldSearch, worlds: List[WorldDirectory]) -> Dict[str, Any]:
    return {
        "worlds": [w.to_dict() for w in worlds],
        "stats": search.stats.to_dict(),
        "issues": [i.to_dict() for i in search.warnings],
    }


def _print_human_summary(search: WorldSearch) -> None:
    """
    Print the end-of-run report to stderr.

    Args:
        search: The exhausted search whose statistics are reported.
    """
    stats = search.stats
    print("", file=sys.stderr)
    print(i18n.t("cli.status.done", count=stats.worlds_found), file=sys.stderr)
    print(i18n.t("cli.status.directories", count=stats.directories_visited), file=sys.stderr)

    warning_count = len(search.warnings)
    if warning_count:
        print(i18n.t("cli.status.warnings", count=warning_count), file=sys.stderr)
    if stats.cycles_skipped:
        print(i18n.t("cli.status.cycles", count=stats.cycles_skipped), file=sys.stderr)

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
