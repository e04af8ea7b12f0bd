"""Bus master discovery and per-device w1_slave reading."""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path

from w1therm.core.errors import EnumerationError
from w1therm.core.model import BusMaster, ReaderConfig, SlaveDevice
from w1therm.sysfs.bulk_read import supports_bulk_read, trigger_bulk_read

LOGGER = logging.getLogger(__name__)

NOT_FOUND_SENTINEL = "not found."
_TEMPERATURE_RE = re.compile(r"t=(-?\d+)")
_HEX_PAIR_COUNT = 6
_MASTER_NUMBER_RE = re.compile(r"(\d+)$")


def normalize_id(raw_id: str) -> str:
    """Reverse the six byte pairs following the family byte of `raw_id`.

    `10-0102030405ab` becomes `AB0504030201`. Applying the reversal to the
    12-digit suffix of either form yields the other form.
    """
    digits = raw_id[3:15] if len(raw_id) > 12 else raw_id
    pairs = [digits[i : i + 2] for i in range(0, _HEX_PAIR_COUNT * 2, 2)]
    return "".join(reversed(pairs)).upper()


def parse_temperature(text: str) -> float | None:
    match = _TEMPERATURE_RE.search(text)
    if not match:
        return None
    return int(match.group(1)) / 1000.0


def _master_sort_key(path: Path) -> tuple[str, int, str]:
    match = _MASTER_NUMBER_RE.search(path.name)
    if not match:
        return (path.name, -1, path.name)
    return (path.name[: match.start()], int(match.group(1)), path.name)


def list_bus_masters(config: ReaderConfig) -> list[BusMaster]:
    try:
        entries = sorted(
            (p for p in config.masters_path.iterdir() if config.bus_master_prefix in p.name),
            key=_master_sort_key,
        )
    except OSError as exc:
        raise EnumerationError(f"Could not list bus masters in {config.masters_path}: {exc}") from exc

    return [
        BusMaster(name=path.name, path=path, supports_bulk_read=supports_bulk_read(path))
        for path in entries
    ]


def list_slave_ids(master: BusMaster) -> list[str]:
    try:
        content = master.slaves_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise EnumerationError(f"Could not read slave list of {master.name}: {exc}") from exc

    ids: list[str] = []
    for line in content.splitlines():
        device_id = line.strip()
        if not device_id or device_id == NOT_FOUND_SENTINEL:
            continue
        ids.append(device_id)
    return ids


def read_device(devices_path: Path, master: BusMaster, device_id: str) -> SlaveDevice | None:
    data_file = devices_path / device_id / "w1_slave"
    try:
        if not data_file.exists():
            LOGGER.debug("Skipping %s: %s does not exist", device_id, data_file)
            return None
        content = data_file.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.debug("Skipping %s: %s", device_id, exc)
        return None

    temperature = parse_temperature(content)
    if temperature is None:
        LOGGER.debug("Skipping %s: no temperature in %s", device_id, data_file)
        return None

    return SlaveDevice(
        family=device_id[:2],
        raw_id=device_id,
        normalized_id=normalize_id(device_id),
        bus_master=master.name,
        temperature_c=temperature,
    )


async def _read_master_devices(config: ReaderConfig, master: BusMaster) -> list[SlaveDevice]:
    await trigger_bulk_read(
        master,
        poll_interval_s=config.poll_interval_s,
        timeout_s=config.bulk_read_timeout_s,
    )
    device_ids = list_slave_ids(master)
    semaphore = asyncio.Semaphore(max(1, config.max_workers))

    async def _read(device_id: str) -> SlaveDevice | None:
        async with semaphore:
            return await asyncio.to_thread(read_device, config.devices_path, master, device_id)

    results = await asyncio.gather(*(_read(device_id) for device_id in device_ids))
    return [device for device in results if device is not None]


async def enumerate_devices(config: ReaderConfig) -> list[SlaveDevice]:
    devices: list[SlaveDevice] = []
    for master in list_bus_masters(config):
        devices.extend(await _read_master_devices(config, master))
    return devices


def enumerate_devices_sync(config: ReaderConfig) -> list[SlaveDevice]:
    return asyncio.run(enumerate_devices(config))
