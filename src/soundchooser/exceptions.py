"""Exception hierarchy for device enumeration and switching."""

from __future__ import annotations


class SoundChooserError(Exception):
    """Base exception for all soundchooser errors."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        self.returncode = returncode
        super().__init__(message)


class ScriptMissingError(SoundChooserError):
    """The enumeration script is absent or not executable."""


class EnumerationError(SoundChooserError):
    """The enumeration script failed to spawn, timed out, or exited non-zero."""


class SwitchError(SoundChooserError):
    """The switch command could not be spawned."""
