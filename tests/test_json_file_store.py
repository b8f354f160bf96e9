"""Tests for the JSON-file key/value store."""

import os

import pytest

from fluid_tracker.adapters.json_file_store import JsonFileKeyValueStore
from fluid_tracker.domain.fluids import WATER, Fluid, decode_fluids


def test_missing_file_reads_as_empty(tmp_path) -> None:
    store = JsonFileKeyValueStore.create(tmp_path / "missing.json")

    assert store.get("moist:fluids") is None


def test_values_survive_reload(tmp_path) -> None:
    path = tmp_path / "nested" / "store.json"
    store = JsonFileKeyValueStore.create(path)
    store.set("moist:fluids", WATER.encoded)
    store.set("moist:prefs", "\x03")

    reloaded = JsonFileKeyValueStore.create(path)

    assert reloaded.get("moist:fluids") == WATER.encoded
    assert reloaded.get("moist:prefs") == "\x03"
    assert list(path.parent.iterdir()) == [path]


def test_every_16_bit_word_round_trips(tmp_path) -> None:
    path = tmp_path / "store.json"
    value = "\x00\ud800\udfff\uffff\u8000\udc00"
    JsonFileKeyValueStore.create(path).set("moist:20240214", value)

    assert JsonFileKeyValueStore.create(path).get("moist:20240214") == value


def test_non_object_file_is_rejected(tmp_path) -> None:
    path = tmp_path / "store.json"
    path.write_text("[1, 2]", encoding="ascii")

    with pytest.raises(ValueError):
        JsonFileKeyValueStore.create(path).get("anything")


def test_fluid_names_outside_bmp_keep_their_word_count(tmp_path) -> None:
    path = tmp_path / "store.json"
    tea = Fluid.create("Tea \U0001f375", "#6c6", 100)
    JsonFileKeyValueStore.create(path).set("moist:fluids", tea.encoded)

    raw = JsonFileKeyValueStore.create(path).get("moist:fluids")

    assert raw == tea.encoded
    assert decode_fluids(raw) == [tea]


def test_failed_write_keeps_previous_value(tmp_path, monkeypatch) -> None:
    path = tmp_path / "store.json"
    store = JsonFileKeyValueStore.create(path)
    store.set("moist:prefs", "\x01")

    def fail_replace(src, dst) -> None:
        raise OSError("read-only file system")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(OSError):
        store.set("moist:prefs", "\x03")

    assert store.get("moist:prefs") == "\x01"
    assert list(path.parent.iterdir()) == [path]


def test_hand_edited_utf8_file_is_read(tmp_path) -> None:
    path = tmp_path / "store.json"
    path.write_text('{"note": "café"}', encoding="utf-8")

    assert JsonFileKeyValueStore.create(path).get("note") == "café"
