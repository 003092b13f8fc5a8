"""Fire-and-forget default-sink switching via ``wpctl set-default``."""

from __future__ import annotations

import functools
import subprocess
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass

from soundchooser.exceptions import SwitchError
from soundchooser.settings import DEFAULT_SWITCH_COMMAND
from soundchooser.utils.logging import get_logger


@dataclass(frozen=True)
class SwitchOutcome:
    """Whether the switch command could be spawned for a device."""

    device_id: str
    label: str
    success: bool
    error: str = ""


class DeviceSwitcher:
    """Spawns the switch command without waiting for it to finish.

    Success means the process was spawned; its exit code is not
    observed. Failures are logged and never raised to the caller.
    """

    def __init__(
        self,
        command: tuple[str, ...] = DEFAULT_SWITCH_COMMAND,
        executor: Executor | None = None,
        logger=None,
    ) -> None:
        self._command = tuple(command)
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="soundchooser-switch",
        )
        self._log = logger if logger is not None else get_logger(__name__)

    def build_command(self, device_id: int | str) -> list[str]:
        return [*self._command, str(device_id)]

    def spawn(self, device_id: int | str) -> subprocess.Popen:
        """Start the switch command for *device_id* and return the process.

        The child is reaped by a daemon thread so it never lingers as a zombie.

        Raises:
            SwitchError: If the command cannot be spawned.
        """
        cmd = self.build_command(device_id)
        try:
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except FileNotFoundError as exc:
            raise SwitchError(f"{cmd[0]} not found: {exc}") from exc
        except OSError as exc:
            raise SwitchError(f"Failed to launch {cmd[0]}: {exc}") from exc
        except ValueError as exc:
            # e.g. an id containing a NUL byte
            raise SwitchError(f"Invalid switch command for device {device_id!r}: {exc}") from exc

        threading.Thread(
            target=self._reap, args=(proc, str(device_id)), daemon=True,
        ).start()
        return proc

    def switch_to(self, device_id: int | str, label: str) -> Future[SwitchOutcome]:
        """Make *device_id* the default sink in the background.

        Returns the future for callers that want it; menu handlers ignore it.
        """
        future = self._executor.submit(self._attempt, device_id, label)
        future.add_done_callback(functools.partial(self._log_outcome, str(device_id), label))
        return future

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    # --- internal ---

    def _attempt(self, device_id: int | str, label: str) -> SwitchOutcome:
        try:
            self.spawn(device_id)
        except SwitchError as exc:
            return SwitchOutcome(str(device_id), label, success=False, error=str(exc))
        return SwitchOutcome(str(device_id), label, success=True)

    def _log_outcome(self, device_id: str, label: str, future: Future[SwitchOutcome]) -> None:
        if future.cancelled():
            self._log.warning("switch_cancelled", device_id=device_id, label=label)
            return
        exc = future.exception()
        if exc is not None:
            self._log.error("switch_failed", device_id=device_id, label=label, error=str(exc))
            return

        outcome = future.result()
        if outcome.success:
            self._log.info("switch_spawned", device_id=outcome.device_id, label=outcome.label)
        else:
            self._log.error(
                "switch_failed",
                device_id=outcome.device_id,
                label=outcome.label,
                error=outcome.error,
            )

    def _reap(self, proc: subprocess.Popen, device_id: str) -> None:
        returncode = proc.wait()
        self._log.debug("switch_command_exited", device_id=device_id, return_code=returncode)
