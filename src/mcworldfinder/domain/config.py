from __future__ import annotations

"""
Configuration Domain Management.

Defines the session configuration consumed by the search orchestrator.
Configuration is dictionary-based and never persisted: it is built from
these defaults and the command line overrides of a single invocation.
"""

from typing import Any, Dict


DEFAULT_WORKERS = 1
DEFAULT_OUTPUT_FORMAT = "plain"
DEFAULT_LOG_LEVEL = "INFO"


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration (Session State).

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Search Scope
        "roots": [],
        "exhaustive": False,
        "follow_symlinks": True,

        # Execution
        "workers": DEFAULT_WORKERS,

        # Output
        "output_format": DEFAULT_OUTPUT_FORMAT,
        "show_summary": True,

        # Diagnostics
        "log_level": DEFAULT_LOG_LEVEL,
        "log_file": "",
    }
