"""Reconcile freshly parsed conversations with the stored collection."""

from __future__ import annotations

import logging

from .models import Conversation

logger = logging.getLogger(__name__)


def _name_key(conversation: Conversation) -> str:
    return conversation.name.lower()


def merge_conversations(
    previous: list[Conversation],
    incoming: list[Conversation],
) -> list[Conversation]:
    """Upsert ``incoming`` into ``previous`` by case-insensitive name.

    A conversation that replaces a stored one keeps the stored ``id``, so
    anything referring to it by id survives a re-import. The whole batch is
    merged against the same ``previous`` snapshot. The result is ordered by
    ``last_timestamp``, most recent first.
    """
    by_name: dict[str, Conversation] = {_name_key(conv): conv for conv in previous}

    for conv in incoming:
        key = _name_key(conv)
        existing = by_name.get(key)
        if existing is not None:
            logger.debug("Replacing '%s' (keeping id %s)", conv.name, existing.id)
            by_name[key] = conv.model_copy(update={"id": existing.id})
        else:
            by_name[key] = conv

    # Empty conversations trail everything, including pre-1970 (negative) instants
    return sorted(
        by_name.values(),
        key=lambda c: (bool(c.messages), c.last_timestamp or 0),
        reverse=True,
    )
