"""Data models for parsed WhatsApp transcripts."""

from __future__ import annotations

import secrets
import time

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def make_conversation_id() -> str:
    return f"chat-{int(time.time() * 1000)}-{secrets.token_hex(3)}"


class _Record(BaseModel):
    # Stored JSON uses camelCase keys (isSystem, lastMessage, ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Message(_Record):
    date: str
    time: str
    sender: str
    text: str
    is_system: bool = False
    timestamp: int = 0


class Conversation(_Record):
    id: str
    name: str
    messages: list[Message] = []
    last_message: str = ""
    last_time: str = ""
    last_timestamp: int = 0
    message_count: int = 0

    @classmethod
    def from_messages(
        cls,
        name: str,
        messages: list[Message],
        id: str | None = None,
    ) -> Conversation:
        """Build a conversation whose cached fields are derived from ``messages``."""
        last = messages[-1] if messages else None
        return cls(
            id=id or make_conversation_id(),
            name=name,
            messages=list(messages),
            last_message=last.text if last else "",
            last_time=last.time if last else "",
            last_timestamp=last.timestamp if last else 0,
            message_count=len(messages),
        )
