"""Presentation interface the menu coordinator renders into."""

from __future__ import annotations

import abc
from enum import StrEnum
from typing import Any, Callable

from pydantic import BaseModel

# Title and separator
FIXED_PREFIX_SIZE = 2


class EntryKind(StrEnum):
    """Kind of row in a rendered menu."""
    TITLE = "title"
    SEPARATOR = "separator"
    DEVICE = "device"
    STATUS = "status"


class MenuEntry(BaseModel):
    """One rendered menu row."""
    kind: EntryKind
    text: str = ""
    selectable: bool = False


class MenuPresenter(abc.ABC):
    """Host-side menu widget the coordinator draws on.

    Handles are opaque to the coordinator; it only passes them back to
    :meth:`on_activate`.
    """

    @abc.abstractmethod
    def remove_all(self) -> None:
        """Remove every entry, including the fixed prefix."""

    @abc.abstractmethod
    def add_text_entry(self, text: str, selectable: bool = False) -> Any:
        """Append a text row and return its handle."""

    @abc.abstractmethod
    def add_separator(self) -> Any:
        """Append a separator row and return its handle."""

    @abc.abstractmethod
    def add_selectable_entry(self, text: str) -> Any:
        """Append a clickable device row and return its handle."""

    @abc.abstractmethod
    def on_activate(self, handle: Any, callback: Callable[[], None]) -> None:
        """Invoke *callback* when the row behind *handle* is activated."""

    @abc.abstractmethod
    def clear_dynamic_entries(self) -> None:
        """Remove every entry after the first FIXED_PREFIX_SIZE rows."""


class MenuModelPresenter(MenuPresenter):
    """In-memory presenter; its entry list is the rendered menu view."""

    def __init__(self) -> None:
        self._entries: list[MenuEntry] = []
        self._callbacks: dict[int, Callable[[], None]] = {}

    @property
    def entries(self) -> list[MenuEntry]:
        return list(self._entries)

    @property
    def dynamic_entries(self) -> list[MenuEntry]:
        return self._entries[FIXED_PREFIX_SIZE:]

    @property
    def selectable_entries(self) -> list[MenuEntry]:
        return [e for e in self.dynamic_entries if e.selectable]

    def remove_all(self) -> None:
        self._entries.clear()
        self._callbacks.clear()

    def add_text_entry(self, text: str, selectable: bool = False) -> int:
        # The first text row of an empty menu is its title
        kind = EntryKind.TITLE if not self._entries else EntryKind.STATUS
        return self._append(MenuEntry(kind=kind, text=text, selectable=selectable))

    def add_separator(self) -> int:
        return self._append(MenuEntry(kind=EntryKind.SEPARATOR))

    def add_selectable_entry(self, text: str) -> int:
        return self._append(MenuEntry(kind=EntryKind.DEVICE, text=text, selectable=True))

    def on_activate(self, handle: int, callback: Callable[[], None]) -> None:
        if not 0 <= handle < len(self._entries):
            raise IndexError(f"No menu entry with handle {handle}")
        self._callbacks[handle] = callback

    def clear_dynamic_entries(self) -> None:
        del self._entries[FIXED_PREFIX_SIZE:]
        for handle in [h for h in self._callbacks if h >= FIXED_PREFIX_SIZE]:
            del self._callbacks[handle]

    def activate(self, index: int) -> bool:
        """Simulate a click on row *index*; returns False for inert rows."""
        if not 0 <= index < len(self._entries):
            raise IndexError(f"No menu entry at index {index}")
        if not self._entries[index].selectable:
            return False
        callback = self._callbacks.get(index)
        if callback is None:
            return False
        callback()
        return True

    def _append(self, entry: MenuEntry) -> int:
        self._entries.append(entry)
        return len(self._entries) - 1
