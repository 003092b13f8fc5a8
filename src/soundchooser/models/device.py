"""Audio sink and enumeration result models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field, computed_field, model_validator


class ListStatus(StrEnum):
    """Terminal outcome of one enumeration attempt."""
    OK = "ok"
    EMPTY_OUTPUT = "empty_output"
    COMMAND_MISSING = "command_missing"
    COMMAND_FAILED = "command_failed"


class Device(BaseModel):
    """One audio output sink parsed from a line of enumeration output."""
    model_config = {"frozen": True}

    id: int | str = Field(description="Sink identifier passed to the switch command")
    description: str | None = Field(default=None, description="Human readable sink name")

    @computed_field
    @property
    def label(self) -> str:
        """Display text: the description, or ``Device {id}`` when it is blank."""
        if self.description and self.description.strip():
            return self.description.strip()
        return f"Device {self.id}"


class DeviceListResult(BaseModel):
    """Outcome of a single ``list_devices`` call."""
    model_config = {"frozen": True}

    status: ListStatus
    devices: tuple[Device, ...] = ()
    message: str = Field(default="", description="Failure detail for command_failed")
    skipped: int = Field(default=0, ge=0, description="Lines that were not valid JSON objects")
    dropped: int = Field(default=0, ge=0, description="Parsed records without a usable id")

    @model_validator(mode="after")
    def _devices_only_when_ok(self) -> DeviceListResult:
        if self.devices and self.status != ListStatus.OK:
            raise ValueError(f"devices must be empty for status {self.status.value!r}")
        return self

    @property
    def ok(self) -> bool:
        return self.status == ListStatus.OK

    @property
    def parse_skipped(self) -> bool:
        """True when at least one line was skipped; informational alongside ``ok``."""
        return self.skipped > 0

    @classmethod
    def success(cls, devices: list[Device], skipped: int = 0, dropped: int = 0) -> DeviceListResult:
        return cls(status=ListStatus.OK, devices=tuple(devices), skipped=skipped, dropped=dropped)

    @classmethod
    def empty_output(cls) -> DeviceListResult:
        return cls(status=ListStatus.EMPTY_OUTPUT)

    @classmethod
    def command_missing(cls, message: str = "") -> DeviceListResult:
        return cls(status=ListStatus.COMMAND_MISSING, message=message)

    @classmethod
    def command_failed(cls, message: str) -> DeviceListResult:
        return cls(status=ListStatus.COMMAND_FAILED, message=message)
