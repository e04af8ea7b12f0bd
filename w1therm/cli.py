"""Typer CLI entrypoint."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

from w1therm.core.config_loader import load_config
from w1therm.core.errors import W1ThermError
from w1therm.core.service import W1ThermService

app = typer.Typer(help="Read DS18B20 temperature sensors from the Linux w1 sysfs tree")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _build_service(config_path: Path | None) -> W1ThermService:
    return W1ThermService(config=load_config(config_path))


@app.command("masters")
def list_masters(
    config: Path | None = typer.Option(None, "--config", help="Path to a YAML config file"),
) -> None:
    """List w1 bus masters and whether they support bulk conversion."""
    try:
        service = _build_service(config)
        masters = service.list_bus_masters()
        if not masters:
            typer.echo("No bus masters found")
            return

        for master in masters:
            bulk = "bulk" if master.supports_bulk_read else "no-bulk"
            typer.echo(f"{master.name} ({bulk})")
    except W1ThermError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("devices")
def list_devices(
    config: Path | None = typer.Option(None, "--config", help="Path to a YAML config file"),
) -> None:
    """Trigger a conversion and list every readable sensor."""
    try:
        service = _build_service(config)
        devices = service.list_devices()
        if not devices:
            typer.echo("No devices found")
            return

        for device in devices:
            typer.echo(
                f"{device.raw_id} {device.normalized_id} {device.bus_master} {device.temperature_c} C"
            )
    except W1ThermError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("read")
def read(
    topic: str | None = typer.Argument(None, help="Device ID or space-separated list of IDs"),
    array: bool = typer.Option(False, "--array", help="Return all matches as a single record"),
    config: Path | None = typer.Option(None, "--config", help="Path to a YAML config file"),
) -> None:
    """Read sensors and print one JSON record per line.

    TOPIC falls back to the configured default topic; without either, every sensor is read.
    """
    try:
        service = _build_service(config)
        message: dict[str, object] = {}
        if array:
            message["array"] = True
        if topic:
            message["topic"] = topic
        for record in service.handle_message(message):
            typer.echo(json.dumps(record))
    except W1ThermError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
