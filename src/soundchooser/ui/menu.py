"""NiceGUI adapter for the device menu.

Renders the coordinator's rows into a ``ui.menu`` hanging off a speaker
button. Clicking the button refreshes the list, like clicking the tray
icon does in a desktop panel.
"""

from __future__ import annotations

from typing import Callable

from nicegui import ui

from soundchooser.core.coordinator import MenuCoordinator
from soundchooser.core.lister import DeviceLister
from soundchooser.core.presenter import FIXED_PREFIX_SIZE, MenuPresenter
from soundchooser.core.switcher import DeviceSwitcher
from soundchooser.settings import ChooserSettings
from soundchooser.ui.theme import COLORS, CSS
from soundchooser.utils.logging import get_logger

logger = get_logger(__name__)


class NiceGuiMenuPresenter(MenuPresenter):
    """Draws menu rows as children of a NiceGUI menu element."""

    def __init__(self, menu: ui.menu) -> None:
        self._menu = menu
        self._items: list[ui.element] = []

    def remove_all(self) -> None:
        self._menu.clear()
        self._items.clear()

    def add_text_entry(self, text: str, selectable: bool = False) -> ui.menu_item:
        with self._menu:
            item = ui.menu_item(text, auto_close=selectable)
        if not selectable:
            item.props("disable")
        if not self._items:
            item.style(f"color: {COLORS['text_primary']}; font-weight: bold")
        self._items.append(item)
        return item

    def add_separator(self) -> ui.separator:
        with self._menu:
            sep = ui.separator()
        self._items.append(sep)
        return sep

    def add_selectable_entry(self, text: str) -> ui.menu_item:
        with self._menu:
            item = ui.menu_item(text)
        self._items.append(item)
        return item

    def on_activate(self, handle: ui.menu_item, callback: Callable[[], None]) -> None:
        handle.on("click", lambda _: callback())

    def clear_dynamic_entries(self) -> None:
        for item in self._items[FIXED_PREFIX_SIZE:]:
            self._menu.remove(item)
        del self._items[FIXED_PREFIX_SIZE:]


def device_menu(settings: ChooserSettings, switcher: DeviceSwitcher) -> MenuCoordinator:
    """Create the speaker button with its device menu and wire up refreshes."""
    with ui.button(icon="speaker").props("flat round").style(
        f"color: {COLORS['accent_blue']}"
    ) as button:
        menu = ui.menu()

    coordinator = MenuCoordinator(
        NiceGuiMenuPresenter(menu),
        lister=DeviceLister(timeout=settings.timeout_seconds),
        switcher=switcher,
        script_path=settings.script_path,
        title=settings.menu_title,
    )
    coordinator.build()
    button.on("click", coordinator.refresh_async)
    return coordinator


def menu_page(settings: ChooserSettings, switcher: DeviceSwitcher) -> None:
    """Render the page at / with the device menu in the header."""
    ui.add_css(CSS)
    ui.dark_mode(True)

    with ui.header(elevated=True).classes("q-pa-sm items-center"):
        ui.label("Sound Output Chooser").classes("text-h6")
        ui.space()
        coordinator = device_menu(settings, switcher)

    ui.label("Click the speaker to pick the default audio output.").style(
        f"color: {COLORS['text_secondary']}"
    )
    ui.timer(0.1, coordinator.refresh_async, once=True)
    logger.debug("menu_page_rendered", script=str(settings.script_path))
