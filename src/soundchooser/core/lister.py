"""Run the enumeration script and turn its output into a DeviceListResult."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from soundchooser.core.parser import parse_device_lines
from soundchooser.exceptions import EnumerationError, ScriptMissingError
from soundchooser.models.device import DeviceListResult
from soundchooser.settings import DEFAULT_TIMEOUT_SECONDS
from soundchooser.utils.logging import get_logger

_STDERR_FALLBACK = "enumeration script produced no error output"


class DeviceLister:
    """Enumerates audio sinks by running an external script.

    Every failure is folded into the returned DeviceListResult; this
    class never raises to its caller.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS, logger=None) -> None:
        self._timeout = timeout
        self._log = logger if logger is not None else get_logger(__name__)

    @property
    def timeout(self) -> float:
        return self._timeout

    def list_devices(self, script_path: str | Path) -> DeviceListResult:
        """Run *script_path* and parse its stdout into devices."""
        path = Path(script_path)

        try:
            self._check_executable(path)
        except ScriptMissingError as exc:
            self._log.error("enumeration_script_missing", path=str(path), error=str(exc))
            return DeviceListResult.command_missing(str(exc))

        try:
            stdout = self._run(path)
        except EnumerationError as exc:
            self._log.error(
                "enumeration_failed",
                path=str(path),
                error=str(exc),
                return_code=exc.returncode,
            )
            return DeviceListResult.command_failed(str(exc))

        self._log.debug("enumeration_output", output=stdout.strip())

        parsed = parse_device_lines(stdout)
        if parsed.line_count == 0:
            self._log.info("enumeration_empty_output", path=str(path))
            return DeviceListResult.empty_output()

        if parsed.skipped:
            self._log.warning("enumeration_lines_skipped", skipped=parsed.skipped)

        self._log.info(
            "enumeration_complete",
            devices=len(parsed.devices),
            skipped=parsed.skipped,
            dropped=parsed.dropped,
        )
        return DeviceListResult.success(
            parsed.devices,
            skipped=parsed.skipped,
            dropped=parsed.dropped,
        )

    # --- internal ---

    @staticmethod
    def _check_executable(path: Path) -> None:
        if not path.is_file():
            raise ScriptMissingError(f"Enumeration script not found at {path}")
        if not os.access(path, os.X_OK):
            raise ScriptMissingError(f"Enumeration script at {path} is not executable")

    def _run(self, path: Path) -> str:
        """Run the script and return stdout, raising EnumerationError on any failure."""
        try:
            result = subprocess.run(
                [str(path)],
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise EnumerationError(
                f"Enumeration script timed out after {self._timeout:g} seconds"
            ) from exc
        except OSError as exc:
            raise EnumerationError(f"Failed to launch enumeration script: {exc}") from exc

        if result.returncode != 0:
            message = (result.stderr or "").strip() or (
                f"{_STDERR_FALLBACK} (exit code {result.returncode})"
            )
            raise EnumerationError(message, returncode=result.returncode)

        return result.stdout or ""
