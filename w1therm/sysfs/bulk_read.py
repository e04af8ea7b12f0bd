"""Bulk conversion trigger for w1 bus masters exposing therm_bulk_read."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path

from w1therm.core.errors import BulkReadTimeoutError, BulkReadTriggerError
from w1therm.core.model import BusMaster

LOGGER = logging.getLogger(__name__)

TRIGGER_TOKEN = "trigger\n"


def supports_bulk_read(master_path: Path) -> bool:
    return (master_path / "therm_bulk_read").exists()


def _read_control(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _write_control(path: Path, data: str) -> None:
    path.write_text(data, encoding="utf-8")


async def trigger_bulk_read(
    master: BusMaster,
    *,
    poll_interval_s: float = 0.1,
    timeout_s: float = 5.0,
) -> None:
    """Start a simultaneous conversion on `master` and wait until it reports ready.

    Masters without a therm_bulk_read file are left alone; their devices are read
    individually and reflect their last conversion.
    """
    if not master.supports_bulk_read:
        return

    control = master.bulk_read_file
    try:
        await asyncio.to_thread(_write_control, control, TRIGGER_TOKEN)
    except OSError as exc:
        raise BulkReadTriggerError(f"Could not trigger bulk read on {master.name}: {exc}") from exc

    deadline = time.monotonic() + timeout_s
    while True:
        try:
            state = await asyncio.to_thread(_read_control, control)
        except (OSError, UnicodeDecodeError) as exc:
            raise BulkReadTriggerError(
                f"Could not read bulk read state of {master.name}: {exc}"
            ) from exc
        if state.startswith("1"):
            LOGGER.debug("Bulk conversion on %s complete", master.name)
            return
        if time.monotonic() >= deadline:
            raise BulkReadTimeoutError(
                f"Timed out after {timeout_s}s waiting for bulk conversion on {master.name}"
            )
        await asyncio.sleep(poll_interval_s)
