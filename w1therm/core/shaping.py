"""Turn a device snapshot into output records for a read request."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from w1therm.core.device_match import find_device
from w1therm.core.model import ReadRequest, SlaveDevice

UNRESOLVED_FAMILY = 0


def device_record(request: ReadRequest, device: SlaveDevice) -> dict[str, Any]:
    record = dict(request.input_record)
    record["file"] = device.source_file
    record["dir"] = device.bus_master
    record["topic"] = device.normalized_id
    record["family"] = device.family
    record["payload"] = device.temperature_c
    return record


def missing_record(request: ReadRequest) -> dict[str, Any]:
    record = dict(request.input_record)
    record["family"] = UNRESOLVED_FAMILY
    record["payload"] = ""
    return record


def array_record(request: ReadRequest, payload: list[dict[str, Any] | None]) -> dict[str, Any]:
    record = dict(request.input_record)
    record["topic"] = ""
    record["payload"] = payload
    return record


def shape_output(request: ReadRequest, devices: Sequence[SlaveDevice]) -> list[dict[str, Any]]:
    """Build output records from `devices` according to the request topic and array mode.

    Without a topic every device is reported, either as one record each or as a
    single list-valued record. With a topic each whitespace separated token is
    resolved; a single token outside array mode yields one record (a sentinel
    with family 0 when unresolved), anything else yields a single record whose
    payload keeps `None` for every unresolved token.
    """
    tokens = request.tokens
    if not tokens:
        if request.array_mode:
            return [array_record(request, [device.as_payload() for device in devices])]
        return [device_record(request, device) for device in devices]

    if request.array_mode or len(tokens) > 1:
        resolved = [find_device(devices, token) for token in tokens]
        payload = [device.as_payload() if device else None for device in resolved]
        return [array_record(request, payload)]

    device = find_device(devices, tokens[0])
    if device is None:
        return [missing_record(request)]
    return [device_record(request, device)]
