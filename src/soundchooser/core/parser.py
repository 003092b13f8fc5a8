"""Parser for line-delimited JSON sink listings.

Each non-blank line is one JSON object such as::

    {"id": 48, "desc": "Built-in Audio Analog Stereo"}

Lines are parsed independently so a single corrupt record never
discards the rest of the listing.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from soundchooser.models.device import Device
from soundchooser.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ParsedDevices:
    """Devices recovered from enumeration output plus per-line diagnostics."""

    devices: list[Device] = field(default_factory=list)
    skipped: int = 0
    dropped: int = 0
    line_count: int = 0


def split_lines(text: str) -> list[str]:
    """Return the non-blank lines of *text*, stripped, in order."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def _coerce_id(raw: object) -> int | str | None:
    """Return a usable sink id, or None when the record lacks one."""
    # bool is an int subclass; true/false is never a node id
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else str(raw)
    if isinstance(raw, str):
        return raw.strip() or None
    return None


def _coerce_description(raw: object) -> str | None:
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return None


def parse_device_line(line: str) -> Device | None:
    """Parse one line into a Device.

    Returns None when the record parsed but carries no usable ``id``.

    Raises:
        ValueError: If the line is not a JSON object.
    """
    record = json.loads(line)
    if not isinstance(record, dict):
        raise ValueError(f"expected a JSON object, got {type(record).__name__}")

    device_id = _coerce_id(record.get("id"))
    if device_id is None:
        return None
    return Device(id=device_id, description=_coerce_description(record.get("desc")))


def parse_device_lines(text: str) -> ParsedDevices:
    """Parse enumeration stdout into devices, preserving input order."""
    lines = split_lines(text)
    parsed = ParsedDevices(line_count=len(lines))

    for line in lines:
        try:
            device = parse_device_line(line)
        except ValueError as exc:
            # json.JSONDecodeError is a ValueError subclass
            parsed.skipped += 1
            logger.warning("device_line_unparseable", line=line, error=str(exc))
            continue

        if device is None:
            parsed.dropped += 1
            logger.debug("device_line_without_id", line=line)
            continue

        parsed.devices.append(device)

    return parsed
