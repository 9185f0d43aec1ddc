"""Parse exported WhatsApp .txt transcripts into Conversation records."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from functools import reduce
from pathlib import PurePath
from typing import NamedTuple

from .classifier import classify_body
from .headers import HeaderMatch, match_header
from .models import Conversation, Message
from .timestamps import normalize_timestamp

logger = logging.getLogger(__name__)

_EXTENSION = re.compile(r"\.[^/.]+$")


class _Assembly(NamedTuple):
    """Fold accumulator: finished messages plus the one still collecting lines."""

    # Owned by one parse_transcript call; _fold_line appends to it in place
    messages: list[Message]
    pending: Message | None
    discarded: int = 0


def conversation_name(source_name: str) -> str:
    """Base name of the imported file with its final extension removed."""
    return _EXTENSION.sub("", PurePath(source_name).name)


def _start_message(header: HeaderMatch) -> Message:
    classification = classify_body(header.body)
    return Message(
        date=header.date,
        time=header.time,
        sender=classification.sender,
        text=classification.text,
        is_system=classification.is_system,
        timestamp=normalize_timestamp(header.date, header.time),
    )


def _continue_message(message: Message, line: str) -> Message:
    text = f"{message.text}\n{line}" if message.text else line
    return message.model_copy(update={"text": text})


def _fold_line(state: _Assembly, line: str) -> _Assembly:
    header = match_header(line)
    if header is not None:
        if state.pending is not None:
            state.messages.append(state.pending)
        return state._replace(pending=_start_message(header))

    if state.pending is None:
        # Export preamble before the first header
        return state._replace(discarded=state.discarded + 1)

    return state._replace(pending=_continue_message(state.pending, line))


def split_lines(text: str) -> list[str]:
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def parse_transcript(text: str, source_name: str) -> Conversation:
    """Parse one complete transcript.

    Lines that do not open a new message are appended to the body of the
    message before them. Text without any recognizable header yields a
    conversation with no messages.
    """
    state = reduce(_fold_line, split_lines(text), _Assembly(messages=[], pending=None))
    messages = state.messages
    if state.pending is not None:
        messages.append(state.pending)

    name = conversation_name(source_name)
    if state.discarded:
        logger.debug("'%s': ignored %d lines before the first message", name, state.discarded)
    logger.debug("Parsed %d messages from '%s'", len(messages), source_name)

    return Conversation.from_messages(name, messages)


def parse_transcripts(sources: Iterable[tuple[str, str]]) -> list[Conversation]:
    """Parse several ``(text, source_name)`` pairs independently of each other."""
    return [parse_transcript(text, source_name) for text, source_name in sources]
