"""Read-side helpers over a stored conversation collection."""

from __future__ import annotations

from collections import Counter

from .config import DEFAULT_MY_NAME
from .models import Conversation, Message
from .timestamps import timestamp_to_datetime


def filter_conversations(conversations: list[Conversation], term: str | None) -> list[Conversation]:
    """Conversations whose name or last message contains ``term`` (case-insensitive)."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(conversations)
    return [
        conv
        for conv in conversations
        if needle in conv.name.lower() or needle in (conv.last_message or "").lower()
    ]


def find_conversation(conversations: list[Conversation], key: str) -> Conversation | None:
    """Look a conversation up by id, falling back to its case-insensitive name."""
    for conv in conversations:
        if conv.id == key:
            return conv
    lowered = key.lower()
    for conv in conversations:
        if conv.name.lower() == lowered:
            return conv
    return None


def remove_conversation(conversations: list[Conversation], conversation_id: str) -> list[Conversation]:
    return [conv for conv in conversations if conv.id != conversation_id]


def select_imported(merged: list[Conversation], incoming: list[Conversation]) -> Conversation | None:
    """The merged conversation corresponding to the first file of an import."""
    if not incoming:
        return None
    first_name = incoming[0].name.lower()
    return next((conv for conv in merged if conv.name.lower() == first_name), None)


def is_own_message(message: Message, my_name: str | None) -> bool:
    if message.is_system:
        return False
    normalized = ((my_name or "").strip() or DEFAULT_MY_NAME).lower()
    return message.sender.lower() == normalized


def collection_stats(conversations: list[Conversation], top_senders: int = 10) -> dict:
    """Totals, date range and most active senders across the collection."""
    senders: Counter[str] = Counter()
    timestamps: list[int] = []
    for conv in conversations:
        for msg in conv.messages:
            if not msg.is_system:
                senders[msg.sender] += 1
            if msg.timestamp:
                timestamps.append(msg.timestamp)

    conv_count = len(conversations)
    msg_count = sum(conv.message_count for conv in conversations)
    first = timestamp_to_datetime(min(timestamps)) if timestamps else None
    last = timestamp_to_datetime(max(timestamps)) if timestamps else None

    return {
        "total_conversations": conv_count,
        "total_messages": msg_count,
        "date_range_start": first.strftime("%Y-%m-%d") if first else None,
        "date_range_end": last.strftime("%Y-%m-%d") if last else None,
        "top_senders": [{"sender": s, "count": c} for s, c in senders.most_common(top_senders)],
        "avg_messages_per_conversation": round(msg_count / conv_count, 1) if conv_count else 0,
    }
