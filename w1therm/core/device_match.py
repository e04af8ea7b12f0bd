"""Matching user-supplied identifiers against enumerated devices."""

from __future__ import annotations

import re
from collections.abc import Sequence

from w1therm.core.model import SlaveDevice

_FULL_ID_RE = re.compile(r"^([0-9A-F]{2})[-:]([0-9A-F]{12})$")


def _split_identifier(identifier: str) -> tuple[str | None, str]:
    upper_id = identifier.strip().upper()
    match = _FULL_ID_RE.match(upper_id)
    if match:
        return match.group(1), match.group(2)
    return None, upper_id


def matches(device: SlaveDevice, identifier: str) -> bool:
    family, digits = _split_identifier(identifier)
    if family is not None and family != device.family.upper():
        return False
    return digits in (device.raw_suffix, device.normalized_id)


def find_device(devices: Sequence[SlaveDevice], identifier: str) -> SlaveDevice | None:
    for device in devices:
        if matches(device, identifier):
            return device
    return None
