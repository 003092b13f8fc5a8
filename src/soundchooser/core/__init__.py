"""Device discovery, menu coordination and switching."""

from soundchooser.core.coordinator import MenuCoordinator
from soundchooser.core.lister import DeviceLister
from soundchooser.core.presenter import MenuModelPresenter, MenuPresenter
from soundchooser.core.switcher import DeviceSwitcher, SwitchOutcome

__all__ = [
    "DeviceLister",
    "DeviceSwitcher",
    "MenuCoordinator",
    "MenuModelPresenter",
    "MenuPresenter",
    "SwitchOutcome",
]
