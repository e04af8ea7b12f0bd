"""Service layer used by the CLI, the public API, and host integrations."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from w1therm.core.config_loader import load_config
from w1therm.core.device_match import find_device
from w1therm.core.model import BusMaster, ReaderConfig, ReadRequest, SlaveDevice
from w1therm.core.shaping import shape_output
from w1therm.sysfs.discovery import enumerate_devices, list_bus_masters


class W1ThermService:
    """Reads every w1 bus master from scratch on each call.

    The service holds only its immutable `ReaderConfig`; topic and array mode
    travel with each `ReadRequest`.
    """

    def __init__(self, *, config: ReaderConfig | None = None) -> None:
        self.config = config or load_config()

    def list_bus_masters(self) -> list[BusMaster]:
        return list_bus_masters(self.config)

    async def alist_devices(self) -> list[SlaveDevice]:
        return await enumerate_devices(self.config)

    def list_devices(self) -> list[SlaveDevice]:
        return asyncio.run(self.alist_devices())

    def find_device(self, identifier: str) -> SlaveDevice | None:
        return find_device(self.list_devices(), identifier)

    async def aread(self, request: ReadRequest) -> list[dict[str, Any]]:
        devices = await self.alist_devices()
        return shape_output(request, devices)

    def read(self, request: ReadRequest) -> list[dict[str, Any]]:
        return asyncio.run(self.aread(request))

    def request_from_message(self, message: Mapping[str, Any]) -> ReadRequest:
        topic = self.config.topic
        message_topic = message.get("topic")
        if isinstance(message_topic, str) and message_topic.strip():
            topic = message_topic
        array_mode = _message_flag(message.get("array")) or self.config.array
        return ReadRequest(topic=topic, array_mode=array_mode, input_record=dict(message))

    def handle_message(self, message: Mapping[str, Any]) -> list[dict[str, Any]]:
        return self.read(self.request_from_message(message))


_FALSE_WORDS = frozenset({"", "false", "0", "no", "off"})


def _message_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_WORDS
    return bool(value)
