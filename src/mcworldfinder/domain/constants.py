from __future__ import annotations

"""
Domain Constants.

Centralizes the detection signal, default root locations, and process
exit codes shared by the walker, the resolver, and the CLI.
"""

from typing import Tuple

APP_NAME = "mcworldfinder"
APP_VERSION = "0.3.0"

# A directory is a Minecraft world if it directly contains this file.
LEVEL_DAT_NAME = "level.dat"

# -----------------------------------------------------------------------------
# PLATFORM LOCATIONS (https://minecraft.wiki/w/.minecraft)
# -----------------------------------------------------------------------------
WINDOWS_MINECRAFT_DIR = ".minecraft"
MACOS_MINECRAFT_DIR: Tuple[str, ...] = ("Library", "Application Support", "minecraft")
LINUX_MINECRAFT_DIR = ".minecraft"

# -----------------------------------------------------------------------------
# ROOT ORIGINS
# -----------------------------------------------------------------------------
ORIGIN_USER = "user"
ORIGIN_DEFAULT = "default"
ORIGIN_FALLBACK = "fallback"

# -----------------------------------------------------------------------------
# EXIT CODES
# -----------------------------------------------------------------------------
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NO_ROOTS = 2
EXIT_INTERRUPTED = 130

OUTPUT_FORMATS: Tuple[str, ...] = ("plain", "json")
