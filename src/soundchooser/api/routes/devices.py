"""Device listing, menu and switch API endpoints."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Request
from pydantic import BaseModel

from soundchooser.core.coordinator import MenuCoordinator
from soundchooser.core.lister import DeviceLister
from soundchooser.core.presenter import MenuEntry, MenuModelPresenter
from soundchooser.models.device import DeviceListResult

router = APIRouter(tags=["devices"])


class SwitchRequest(BaseModel):
    label: str | None = None


class SwitchResponse(BaseModel):
    device_id: str
    label: str
    accepted: bool = True


@router.get("/devices", response_model=DeviceListResult)
async def list_devices(request: Request) -> DeviceListResult:
    """Run the enumeration script and return the parsed result."""
    settings = request.app.state.settings
    lister = DeviceLister(timeout=settings.timeout_seconds)
    return await asyncio.to_thread(lister.list_devices, settings.script_path)


@router.get("/menu", response_model=list[MenuEntry])
async def get_menu(request: Request) -> list[MenuEntry]:
    """Render the device menu exactly as the tray menu would show it."""
    settings = request.app.state.settings
    presenter = MenuModelPresenter()
    coordinator = MenuCoordinator(
        presenter,
        lister=DeviceLister(timeout=settings.timeout_seconds),
        switcher=request.app.state.switcher,
        script_path=settings.script_path,
        title=settings.menu_title,
    )
    await coordinator.refresh_async()
    return presenter.entries


@router.post("/devices/{device_id}/default", response_model=SwitchResponse, status_code=202)
async def set_default_device(
    device_id: str, request: Request, body: SwitchRequest | None = None,
) -> SwitchResponse:
    """Ask the audio subsystem to make *device_id* the default sink.

    The switch is fire-and-forget; the outcome is only logged.
    """
    label = (body.label if body and body.label else None) or f"Device {device_id}"
    request.app.state.switcher.switch_to(device_id, label)
    return SwitchResponse(device_id=device_id, label=label)
