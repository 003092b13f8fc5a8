"""Runtime settings loaded from the environment."""

from __future__ import annotations

import os
import shlex
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from soundchooser.paths import find_enumeration_script

DEFAULT_TIMEOUT_SECONDS = 5.0
DEFAULT_SWITCH_COMMAND = ("wpctl", "set-default")
DEFAULT_MENU_TITLE = "Audio Output Devices"


class ChooserSettings(BaseModel):
    """Enumeration, switching and menu settings."""

    script_path: Path = Field(default_factory=find_enumeration_script)
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    switch_command: tuple[str, ...] = DEFAULT_SWITCH_COMMAND
    menu_title: str = DEFAULT_MENU_TITLE

    @field_validator("switch_command")
    @classmethod
    def validate_switch_command(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v or not v[0].strip():
            raise ValueError("switch command must name an executable")
        return v

    @classmethod
    def from_env(cls, **overrides: object) -> ChooserSettings:
        """Build settings from SOUNDCHOOSER_* variables; non-None *overrides* win."""
        values: dict[str, object] = {
            "script_path": find_enumeration_script(overrides.pop("script_path", None)),
        }

        timeout = os.environ.get("SOUNDCHOOSER_TIMEOUT")
        if timeout:
            values["timeout_seconds"] = timeout

        switch_cmd = os.environ.get("SOUNDCHOOSER_SWITCH_CMD")
        if switch_cmd:
            values["switch_command"] = tuple(shlex.split(switch_cmd))

        title = os.environ.get("SOUNDCHOOSER_MENU_TITLE")
        if title:
            values["menu_title"] = title

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
