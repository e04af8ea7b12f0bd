"""Stable public API for building tooling on top of w1therm.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from w1therm.core.errors import (
    BulkReadError,
    BulkReadTimeoutError,
    BulkReadTriggerError,
    ConfigLoadError,
    ConfigValidationError,
    EnumerationError,
    W1ThermError,
)
from w1therm.core.model import BusMaster, ReaderConfig, ReadRequest, SlaveDevice
from w1therm.core.service import W1ThermService

__all__ = [
    "W1ThermError",
    "ConfigLoadError",
    "ConfigValidationError",
    "EnumerationError",
    "BulkReadError",
    "BulkReadTriggerError",
    "BulkReadTimeoutError",
    "BusMaster",
    "ReaderConfig",
    "ReadRequest",
    "SlaveDevice",
    "Client",
]


class Client:
    """Public client for reading DS18B20 sensors through the w1 sysfs tree.

    Every call re-enumerates the bus masters; nothing is cached between calls.
    """

    def __init__(self, *, config: ReaderConfig | None = None) -> None:
        self._service = W1ThermService(config=config)

    @property
    def config(self) -> ReaderConfig:
        return self._service.config

    def list_bus_masters(self) -> list[BusMaster]:
        return self._service.list_bus_masters()

    def list_devices(self) -> list[SlaveDevice]:
        return self._service.list_devices()

    def find_device(self, identifier: str) -> SlaveDevice | None:
        return self._service.find_device(identifier)

    def read(
        self,
        topic: str | None = None,
        *,
        array: bool = False,
        input_record: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        request = ReadRequest(topic=topic, array_mode=array, input_record=dict(input_record or {}))
        return self._service.read(request)

    def handle_message(self, message: Mapping[str, Any]) -> list[dict[str, Any]]:
        return self._service.handle_message(message)
