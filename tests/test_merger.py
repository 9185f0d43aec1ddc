"""Tests for merging re-imported conversations."""

from __future__ import annotations

from whatsapp_reader.merger import merge_conversations
from whatsapp_reader.models import Conversation, Message
from whatsapp_reader.parser import parse_transcript


def _conversation(name: str, id: str, timestamp: int, text: str = "hi") -> Conversation:
    messages = [Message(date="1/1/24", time="9:00", sender="Anna", text=text, timestamp=timestamp)]
    return Conversation.from_messages(name, messages, id=id)


def test_reimport_keeps_previous_id() -> None:
    previous = [_conversation("anna", "old1", 100)]
    incoming = [_conversation("Anna", "new1", 500, text="updated")]

    merged = merge_conversations(previous, incoming)

    assert len(merged) == 1
    assert merged[0].id == "old1"
    assert merged[0].name == "Anna"
    assert merged[0].last_timestamp == 500
    assert merged[0].last_message == "updated"


def test_new_conversation_keeps_its_id() -> None:
    merged = merge_conversations([_conversation("Anna", "a", 100)], [_conversation("Luke", "l", 50)])

    assert [c.id for c in merged] == ["a", "l"]


def test_sorted_most_recent_first() -> None:
    convs = [_conversation("a", "1", 10), _conversation("b", "2", 300), _conversation("c", "3", 200)]

    merged = merge_conversations([], convs)

    assert [c.last_timestamp for c in merged] == [300, 200, 10]


def test_empty_conversations_go_last() -> None:
    empty = Conversation.from_messages("empty", [], id="e")
    merged = merge_conversations([empty], [_conversation("b", "b", 5)])

    assert [c.id for c in merged] == ["b", "e"]


def test_merge_is_idempotent() -> None:
    store = [_conversation("Anna", "old1", 100), _conversation("Team", "t", 700)]
    batch = [_conversation("ANNA", "new1", 900), _conversation("Luke", "l", 50)]

    once = merge_conversations(store, batch)
    twice = merge_conversations(once, batch)

    assert twice == once


def test_batch_is_merged_against_one_snapshot() -> None:
    first = _conversation("Anna", "first", 100, text="one")
    second = _conversation("anna", "second", 200, text="two")

    merged = merge_conversations([], [first, second])

    assert len(merged) == 1
    assert merged[0].id == "first"
    assert merged[0].last_message == "two"


def test_inputs_are_not_mutated() -> None:
    previous = [_conversation("anna", "old1", 100)]
    incoming = [_conversation("Anna", "new1", 500)]

    merge_conversations(previous, incoming)

    assert previous[0].id == "old1"
    assert incoming[0].id == "new1"


def test_empty_conversations_go_after_pre_1970_ones() -> None:
    old = parse_transcript("[31/12/1969, 9:00] Anna: old", "Old.txt")
    empty = Conversation.from_messages("empty", [], id="e")

    merged = merge_conversations([empty], [old])

    assert old.last_timestamp < 0
    assert [c.id for c in merged] == [old.id, "e"]
