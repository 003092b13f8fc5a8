"""Enumeration script path resolution."""

from __future__ import annotations

import os
from pathlib import Path

SCRIPT_ENV_VAR = "SOUNDCHOOSER_SCRIPT"
SCRIPT_NAME = "get_audio_devices.sh"
SCRIPTS_SUBDIR = "scripts"


def get_package_dir() -> Path:
    """Directory this package is installed in, independent of the working directory."""
    return Path(__file__).resolve().parent


def default_script_path() -> Path:
    """The enumeration script shipped alongside the package."""
    return get_package_dir() / SCRIPTS_SUBDIR / SCRIPT_NAME


def find_enumeration_script(explicit: str | Path | None = None) -> Path:
    """Resolve the enumeration script path.

    Search order:
        1. *explicit* argument
        2. SOUNDCHOOSER_SCRIPT environment variable
        3. scripts/get_audio_devices.sh inside the installed package

    The returned path is not checked for existence; the lister reports a
    missing script as its own outcome.
    """
    if explicit:
        return Path(explicit).expanduser().resolve()

    env_path = os.environ.get(SCRIPT_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser().resolve()

    return default_script_path()
