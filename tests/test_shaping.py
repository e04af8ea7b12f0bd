from __future__ import annotations

from w1therm.core.model import ReadRequest, SlaveDevice
from w1therm.core.shaping import shape_output
from w1therm.sysfs.discovery import normalize_id


def _device(raw_id: str, temperature_c: float, bus_master: str = "w1_bus_master1") -> SlaveDevice:
    return SlaveDevice(
        family=raw_id[:2],
        raw_id=raw_id,
        normalized_id=normalize_id(raw_id),
        bus_master=bus_master,
        temperature_c=temperature_c,
    )


SNAPSHOT = [
    _device("10-010203040506", 23.562),
    _device("28-0000075e2f1a", -1.25, bus_master="w1_bus_master2"),
]


def test_single_token_single_device() -> None:
    request = ReadRequest(topic="10-010203040506", input_record={"topic": "10-010203040506", "_msgid": "abc"})
    records = shape_output(request, SNAPSHOT[:1])

    assert records == [
        {
            "_msgid": "abc",
            "file": "10-010203040506",
            "dir": "w1_bus_master1",
            "topic": "060504030201",
            "family": "10",
            "payload": 23.562,
        }
    ]


def test_single_token_unresolved_yields_sentinel() -> None:
    request = ReadRequest(topic="10-ffffffffffff", input_record={"topic": "10-ffffffffffff"})
    records = shape_output(request, SNAPSHOT)

    assert records == [{"topic": "10-ffffffffffff", "family": 0, "payload": ""}]


def test_multi_token_keeps_order_and_unresolved_entries() -> None:
    request = ReadRequest(topic="10-010203040506 10-ffffffffffff")
    records = shape_output(request, SNAPSHOT)

    assert len(records) == 1
    assert records[0]["topic"] == ""
    payload = records[0]["payload"]
    assert len(payload) == 2
    assert payload[0] == {
        "family": "10",
        "id": "060504030201",
        "dir": "w1_bus_master1",
        "file": "10-010203040506",
        "temp": 23.562,
    }
    assert payload[1] is None


def test_single_token_in_array_mode_is_a_list() -> None:
    request = ReadRequest(topic="1a2f5e070000", array_mode=True)
    records = shape_output(request, SNAPSHOT)

    assert len(records) == 1
    assert [entry["file"] for entry in records[0]["payload"]] == ["28-0000075e2f1a"]


def test_empty_topic_array_mode_returns_whole_snapshot() -> None:
    records = shape_output(ReadRequest(array_mode=True), SNAPSHOT)

    assert len(records) == 1
    assert records[0]["topic"] == ""
    assert [entry["id"] for entry in records[0]["payload"]] == ["060504030201", "1A2F5E070000"]


def test_empty_topic_array_mode_without_devices() -> None:
    records = shape_output(ReadRequest(topic="", array_mode=True), [])
    assert records == [{"topic": "", "payload": []}]


def test_empty_topic_emits_record_per_device() -> None:
    records = shape_output(ReadRequest(topic="  ", input_record={"source": "poll"}), SNAPSHOT)

    assert [(r["topic"], r["payload"], r["dir"]) for r in records] == [
        ("060504030201", 23.562, "w1_bus_master1"),
        ("1A2F5E070000", -1.25, "w1_bus_master2"),
    ]
    assert all(r["source"] == "poll" for r in records)


def test_empty_topic_without_devices_emits_nothing() -> None:
    assert shape_output(ReadRequest(), []) == []


def test_input_record_is_not_mutated() -> None:
    input_record = {"topic": "10-010203040506"}
    shape_output(ReadRequest(topic="10-010203040506", input_record=input_record), SNAPSHOT)
    assert input_record == {"topic": "10-010203040506"}


def test_repeated_spaces_do_not_add_entries() -> None:
    records = shape_output(ReadRequest(topic="10-010203040506  10-ffffffffffff"), SNAPSHOT)

    payload = records[0]["payload"]
    assert len(payload) == 2
    assert payload[0]["file"] == "10-010203040506"
    assert payload[1] is None
