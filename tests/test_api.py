from __future__ import annotations

from pathlib import Path

from w1therm.api import Client, ReaderConfig


def _config(tmp_path: Path) -> ReaderConfig:
    config = ReaderConfig(
        devices_path=tmp_path / "bus" / "w1" / "devices",
        masters_path=tmp_path / "devices",
    )
    master = config.masters_path / "w1_bus_master1"
    master.mkdir(parents=True)
    (master / "w1_master_slaves").write_text("28-0000075e2f1a\n", encoding="utf-8")
    device = config.devices_path / "28-0000075e2f1a"
    device.mkdir(parents=True)
    (device / "w1_slave").write_text("50 05 4b 46 7f ff 0c 10 1c : crc=1c YES\n50 05 4b 46 7f ff 0c 10 1c t=85000\n")
    return config


def test_public_client_lists_masters_and_devices(tmp_path: Path) -> None:
    client = Client(config=_config(tmp_path))

    masters = client.list_bus_masters()
    assert [m.name for m in masters] == ["w1_bus_master1"]
    assert masters[0].supports_bulk_read is False

    devices = client.list_devices()
    assert len(devices) == 1
    assert devices[0].temperature_c == 85.0


def test_public_client_read_passes_input_record(tmp_path: Path) -> None:
    client = Client(config=_config(tmp_path))

    records = client.read("0000075E2F1A", input_record={"_msgid": "1"})
    assert records == [
        {
            "_msgid": "1",
            "file": "28-0000075e2f1a",
            "dir": "w1_bus_master1",
            "topic": "1A2F5E070000",
            "family": "28",
            "payload": 85.0,
        }
    ]


def test_public_client_read_array(tmp_path: Path) -> None:
    client = Client(config=_config(tmp_path))

    records = client.read(array=True)
    assert len(records) == 1
    assert records[0]["payload"][0]["id"] == "1A2F5E070000"


def test_public_client_handle_message(tmp_path: Path) -> None:
    client = Client(config=_config(tmp_path))

    records = client.handle_message({"topic": "28-ffffffffffff"})
    assert records == [{"topic": "28-ffffffffffff", "family": 0, "payload": ""}]
