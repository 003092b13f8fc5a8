"""Menu coordinator: keeps the sink menu in sync with the enumeration script.

The coordinator owns the dynamic part of a menu drawn through a
:class:`~soundchooser.core.presenter.MenuPresenter`. Each refresh clears
the previous batch, lists devices, and renders either one selectable row
per device or a single disabled status row. Activating a device row
hands the id to the :class:`~soundchooser.core.switcher.DeviceSwitcher`.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from soundchooser.core.lister import DeviceLister
from soundchooser.core.presenter import MenuPresenter
from soundchooser.core.switcher import DeviceSwitcher
from soundchooser.models.device import Device, DeviceListResult, ListStatus
from soundchooser.paths import SCRIPT_NAME, find_enumeration_script
from soundchooser.settings import DEFAULT_MENU_TITLE
from soundchooser.utils.logging import get_logger

MSG_SCRIPT_MISSING = f"Error: {SCRIPT_NAME} missing"
MSG_FETCH_FAILED = "Error fetching audio devices"
MSG_EMPTY_OUTPUT = "No audio devices found. Script output empty"
MSG_NO_DEVICES = "No audio devices found."
MSG_BROKEN = "Extension broke."

_STATUS_MESSAGES = {
    ListStatus.COMMAND_MISSING: MSG_SCRIPT_MISSING,
    ListStatus.COMMAND_FAILED: MSG_FETCH_FAILED,
    ListStatus.EMPTY_OUTPUT: MSG_EMPTY_OUTPUT,
}


class MenuCoordinator:
    """Refreshes a presenter's device rows and dispatches switch requests.

    Refreshes are expected on the host's UI thread. ``refresh_async``
    runs the enumeration in a worker thread instead; a generation
    counter drops results that a newer refresh has superseded.
    """

    def __init__(
        self,
        presenter: MenuPresenter,
        lister: DeviceLister | None = None,
        switcher: DeviceSwitcher | None = None,
        script_path: str | Path | None = None,
        title: str = DEFAULT_MENU_TITLE,
        logger=None,
    ) -> None:
        self._presenter = presenter
        self._log = logger if logger is not None else get_logger(__name__)
        self._lister = lister if lister is not None else DeviceLister(logger=self._log)
        self._switcher = switcher if switcher is not None else DeviceSwitcher(logger=self._log)
        self._script_path = script_path
        self._title = title
        self._built = False
        self._generation = 0

    @property
    def presenter(self) -> MenuPresenter:
        return self._presenter

    @property
    def script_path(self) -> Path:
        """Enumeration script location, resolved against the package directory."""
        return find_enumeration_script(self._script_path)

    def build(self) -> None:
        """Draw the fixed title and separator, replacing anything already shown."""
        self._presenter.remove_all()
        self._presenter.add_text_entry(self._title, selectable=False)
        self._presenter.add_separator()
        self._built = True
        self._log.info("menu_built", title=self._title)

    def refresh(self) -> DeviceListResult | None:
        """Re-list devices and re-render the dynamic rows (blocking).

        Returns the enumeration result, or None if the refresh failed
        unexpectedly and the menu shows the broken-state row.
        """
        try:
            generation = self._begin_refresh()
            result = self._lister.list_devices(self.script_path)
            self._apply(generation, result)
        except Exception:
            self._log.exception("menu_refresh_crashed")
            self._render_broken()
            return None
        return result

    async def refresh_async(self) -> DeviceListResult | None:
        """Like :meth:`refresh`, but enumerates in a worker thread.

        A result is rendered only if no newer refresh started meanwhile.
        """
        generation = None
        try:
            generation = self._begin_refresh()
            result = await asyncio.to_thread(self._lister.list_devices, self.script_path)
            self._apply(generation, result)
        except Exception:
            self._log.exception("menu_refresh_crashed", generation=generation)
            # A newer refresh owns the rows now
            if generation is None or generation == self._generation:
                self._render_broken()
            return None
        return result

    # --- internal ---

    def _begin_refresh(self) -> int:
        if not self._built:
            self.build()
        self._generation += 1
        self._presenter.clear_dynamic_entries()
        self._log.info("menu_refresh_started", generation=self._generation)
        return self._generation

    def _apply(self, generation: int, result: DeviceListResult) -> bool:
        if generation != self._generation:
            self._log.info(
                "menu_refresh_stale",
                generation=generation,
                current=self._generation,
            )
            return False
        self._render(result)
        return True

    def _render(self, result: DeviceListResult) -> None:
        if result.status == ListStatus.OK:
            if not result.devices:
                self._add_status(MSG_NO_DEVICES)
                self._log.info("menu_no_devices", dropped=result.dropped)
                return
            for device in result.devices:
                self._add_device(device)
            return

        self._add_status(_STATUS_MESSAGES[result.status])
        if result.status == ListStatus.EMPTY_OUTPUT:
            self._log.info("menu_empty_output")
            return
        self._log.error(
            "menu_status_rendered",
            status=result.status.value,
            detail=result.message,
        )

    def _add_status(self, text: str) -> None:
        self._presenter.add_text_entry(text, selectable=False)

    def _add_device(self, device: Device) -> None:
        handle = self._presenter.add_selectable_entry(device.label)
        self._presenter.on_activate(handle, lambda: self._activate(device))
        self._log.info("device_added", device_id=device.id, label=device.label)

    def _activate(self, device: Device) -> None:
        self._log.info("device_selected", device_id=device.id, label=device.label)
        try:
            self._switcher.switch_to(device.id, device.label)
        except Exception:
            self._log.exception(
                "switch_dispatch_failed", device_id=device.id, label=device.label,
            )

    def _render_broken(self) -> None:
        try:
            if not self._built:
                self.build()
            self._presenter.clear_dynamic_entries()
            self._add_status(MSG_BROKEN)
        except Exception:
            self._log.exception("menu_broken_state_render_failed")
