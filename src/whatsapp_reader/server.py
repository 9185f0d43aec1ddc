"""FastMCP server exposing imported WhatsApp chats."""

from __future__ import annotations

import logging
import sys

from mcp.server.fastmcp import FastMCP

from .config import DATA_DIR, MAX_TRANSCRIPT_CHARS, STORE_PATH
from .library import collection_stats, filter_conversations, find_conversation
from .storage import KeyValueStore
from .timestamps import timestamp_to_datetime

# Logging to stderr only — stdout is the MCP JSON-RPC transport
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)

mcp = FastMCP(
    "whatsapp-reader",
    instructions=(
        "Browse the user's exported WhatsApp chats. "
        "Use list_conversations to find chats by name or latest message. "
        "Use get_conversation to read a full chat transcript. "
        "Use get_stats for an overview of the imported data."
    ),
)

# Singleton store — reused across tool calls
_store: KeyValueStore | None = None


def _get_store() -> KeyValueStore:
    global _store
    if _store is None:
        _store = KeyValueStore(STORE_PATH)
    return _store


def _format_ts(ts: int) -> str:
    moment = timestamp_to_datetime(ts)
    return moment.strftime("%Y-%m-%d %H:%M") if moment else "Unknown date"


def _check_data_exists() -> str | None:
    """Return an error message if no data has been imported."""
    if not STORE_PATH.exists():
        return (
            "No WhatsApp chats found. Please import an export first:\n"
            "  whatsapp-reader import ~/Downloads/chat.txt"
        )
    return None


@mcp.tool()
def list_conversations(
    keyword: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> str:
    """Browse imported chats, most recent first.

    Args:
        keyword: Optional text to match against chat names and last messages
        limit: Maximum results (default 20)
        offset: Skip this many results (for pagination)
    """
    err = _check_data_exists()
    if err:
        return err

    matching = filter_conversations(_get_store().load_conversations(), keyword)
    page = matching[offset:offset + limit]

    if not page:
        if keyword:
            return f"No chats found matching '{keyword}'."
        return "No chats found."

    lines = []
    if keyword:
        lines.append(f"Chats matching '{keyword}':\n")
    else:
        lines.append(f"Chats (showing {offset + 1}–{offset + len(page)} of {len(matching)}):\n")

    for i, c in enumerate(page, offset + 1):
        lines.append(f"{i}. **{c.name}** ({_format_ts(c.last_timestamp)})")
        lines.append(f"   ID: `{c.id}` | {c.message_count} msgs")
        if c.last_message:
            preview = c.last_message.replace("\n", " ")[:150]
            lines.append(f"   Last: {preview}")

    if offset + limit < len(matching):
        lines.append(f"\nMore available — use offset={offset + limit} to see the next page.")

    return "\n".join(lines)


@mcp.tool()
def get_conversation(conversation_id: str) -> str:
    """Retrieve a full chat transcript.

    Args:
        conversation_id: The chat id (from list_conversations) or the chat name
    """
    err = _check_data_exists()
    if err:
        return err

    conv = find_conversation(_get_store().load_conversations(), conversation_id)
    if conv is None:
        return f"Chat not found: {conversation_id}"

    lines = [
        f"# {conv.name}",
        f"Last activity: {_format_ts(conv.last_timestamp)}",
        f"Messages: {conv.message_count}",
        "",
        "---",
        "",
    ]

    char_count = 0
    for msg in conv.messages:
        remaining_budget = MAX_TRANSCRIPT_CHARS - char_count
        if remaining_budget <= 0 or len(msg.text) > remaining_budget:
            if remaining_budget > 0:
                lines.append(msg.text[:remaining_budget])
            lines.append(
                f"\n... [Truncated — chat exceeds {MAX_TRANSCRIPT_CHARS:,} chars. "
                f"Total: {conv.message_count} messages]"
            )
            break

        if msg.is_system:
            lines.append(f"_{msg.text}_ ({msg.date} {msg.time})")
        else:
            lines.append(f"**{msg.sender}** ({msg.date} {msg.time}):")
            lines.append(msg.text)
        lines.append("")
        char_count += len(msg.text)

    return "\n".join(lines)


@mcp.tool()
def get_stats() -> str:
    """Get statistics about the imported chats.

    Shows total chats, messages, date range, and most active senders.
    """
    err = _check_data_exists()
    if err:
        return err

    stats = collection_stats(_get_store().load_conversations())
    size_mb = STORE_PATH.stat().st_size / (1024 * 1024)

    lines = [
        "# WhatsApp Import Statistics",
        "",
        f"- **Chats**: {stats['total_conversations']:,}",
        f"- **Messages**: {stats['total_messages']:,}",
        f"- **Avg messages/chat**: {stats['avg_messages_per_conversation']}",
        f"- **Storage used**: {size_mb:.1f} MB",
        "",
    ]

    if stats["date_range_start"]:
        lines.append(f"- **Date range**: {stats['date_range_start']} → {stats['date_range_end']}")
        lines.append("")

    if stats["top_senders"]:
        lines.append("## Most active senders:")
        for entry in stats["top_senders"]:
            lines.append(f"- {entry['sender']}: {entry['count']:,} messages")

    lines.append(f"\n*Data stored in: {DATA_DIR}*")
    return "\n".join(lines)
