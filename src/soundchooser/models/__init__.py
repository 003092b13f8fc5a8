"""Pydantic data models for soundchooser."""

from soundchooser.models.device import Device, DeviceListResult, ListStatus

__all__ = [
    "Device",
    "DeviceListResult",
    "ListStatus",
]
