"""Tests for the sqlite key-value store."""

from __future__ import annotations

from pathlib import Path

import pytest

from whatsapp_reader.config import DEFAULT_MY_NAME, STORAGE_KEYS
from whatsapp_reader.parser import parse_transcript
from whatsapp_reader.storage import KeyValueStore


@pytest.fixture
def store(tmp_path: Path):
    with KeyValueStore(tmp_path / "nested" / "store.db") as kv:
        yield kv


def test_get_set_remove(store: KeyValueStore) -> None:
    assert store.get("missing") is None
    store.set("k", "v1")
    store.set("k", "v2")
    assert store.get("k") == "v2"
    store.remove("k")
    assert store.get("k") is None


def test_conversations_round_trip(store: KeyValueStore) -> None:
    convs = [
        parse_transcript("[1/2/24, 9:00] Anna: Ciao\ncome va?", "Anna.txt"),
        parse_transcript("1/2/24, 9:00 - Luke joined", "Team.txt"),
    ]

    store.save_conversations(convs)

    assert store.load_conversations() == convs
    assert '"lastMessage"' in store.get(STORAGE_KEYS["chats"])


def test_saving_empty_collection_clears_key(store: KeyValueStore) -> None:
    store.save_conversations([parse_transcript("[1/2/24, 9:00] Anna: a", "Anna.txt")])
    store.save_conversations([])

    assert store.get(STORAGE_KEYS["chats"]) is None
    assert store.load_conversations() == []


def test_invalid_json_is_discarded(store: KeyValueStore) -> None:
    store.set(STORAGE_KEYS["chats"], "{not json")

    assert store.load_conversations() == []
    assert store.get(STORAGE_KEYS["chats"]) is None


def test_invalid_records_are_discarded(store: KeyValueStore) -> None:
    store.set(STORAGE_KEYS["chats"], '[{"name": "no id"}]')

    assert store.load_conversations() == []
    assert store.get(STORAGE_KEYS["chats"]) is None


def test_non_list_value_is_ignored(store: KeyValueStore) -> None:
    store.set(STORAGE_KEYS["chats"], '{"a": 1}')

    assert store.load_conversations() == []
    assert store.get(STORAGE_KEYS["chats"]) == '{"a": 1}'


def test_my_name(store: KeyValueStore) -> None:
    assert store.get_my_name() == DEFAULT_MY_NAME
    store.set_my_name("  Luke ")
    assert store.get_my_name() == "Luke"
    store.set_my_name("   ")
    assert store.get_my_name() == DEFAULT_MY_NAME


def test_persists_across_connections(tmp_path: Path) -> None:
    path = tmp_path / "store.db"
    conv = parse_transcript("[1/2/24, 9:00] Anna: a", "Anna.txt")
    with KeyValueStore(path) as kv:
        kv.save_conversations([conv])
        kv.record_import(["Anna.txt"], conversations=1, messages=1)

    with KeyValueStore(path) as kv:
        assert kv.load_conversations() == [conv]
        imports = kv.list_imports()

    assert len(imports) == 1
    assert imports[0]["file_paths"] == ["Anna.txt"]
    assert imports[0]["messages_imported"] == 1
