"""Core data models used across enumeration, shaping, service, and CLI."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ReaderConfig:
    devices_path: Path = Path("/sys/bus/w1/devices")
    masters_path: Path = Path("/sys/devices")
    bus_master_prefix: str = "w1_bus_master"
    topic: str | None = None
    array: bool = False
    poll_interval_s: float = 0.1
    bulk_read_timeout_s: float = 5.0
    max_workers: int = 8


@dataclass(frozen=True)
class BusMaster:
    name: str
    path: Path
    supports_bulk_read: bool

    @property
    def slaves_file(self) -> Path:
        return self.path / "w1_master_slaves"

    @property
    def bulk_read_file(self) -> Path:
        return self.path / "therm_bulk_read"


@dataclass(frozen=True)
class SlaveDevice:
    family: str
    raw_id: str
    normalized_id: str
    bus_master: str
    temperature_c: float

    @property
    def source_file(self) -> str:
        return self.raw_id

    @property
    def raw_suffix(self) -> str:
        """Identifier digits after the family byte, uppercased."""
        return self.raw_id[3:].upper()

    def as_payload(self) -> dict[str, Any]:
        return {
            "family": self.family,
            "id": self.normalized_id,
            "dir": self.bus_master,
            "file": self.source_file,
            "temp": self.temperature_c,
        }


@dataclass(frozen=True)
class ReadRequest:
    topic: str | None = None
    array_mode: bool = False
    input_record: Mapping[str, Any] = field(default_factory=dict)

    @property
    def tokens(self) -> tuple[str, ...]:
        if not self.topic:
            return ()
        return tuple(self.topic.split())
