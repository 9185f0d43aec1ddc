"""CLI interface for whatsapp-reader."""

from __future__ import annotations

import logging
import shutil
import sys

import click

from . import __version__
from .config import DATA_DIR, STORE_PATH
from .storage import KeyValueStore
from .timestamps import timestamp_to_datetime


def _open_store() -> KeyValueStore:
    return KeyValueStore(STORE_PATH)


def _format_ts(ts: int) -> str:
    moment = timestamp_to_datetime(ts)
    return moment.strftime("%Y-%m-%d %H:%M") if moment else "Unknown date"


@click.group()
@click.version_option(version=__version__, prog_name="whatsapp-reader")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging on stderr")
def cli(verbose: bool):
    """whatsapp-reader — Browse exported WhatsApp chats.

    Import the .txt files WhatsApp produces with "Export chat", then list,
    search and read them. Re-importing a newer export of the same chat
    updates it in place.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command("import")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
def import_cmd(paths: tuple[str, ...]):
    """Import one or more WhatsApp .txt exports (or directories of them).

    The chat name is taken from the file name, so "Anna.txt" and a later
    "anna.txt" are the same chat.

    Example:
        whatsapp-reader import ~/Downloads/Anna.txt ~/Downloads/exports/
    """
    from .importer import import_transcript_files

    with _open_store() as store:
        import_transcript_files(list(paths), store)


@cli.command("list")
@click.option("-s", "--search", default=None, help="Filter by chat name or last message")
def list_cmd(search: str | None):
    """List imported chats, most recent first."""
    from .library import filter_conversations

    with _open_store() as store:
        conversations = filter_conversations(store.load_conversations(), search)

    if not conversations:
        click.echo(f"No chats matching '{search}'." if search else "No chats imported yet.")
        return

    for conv in conversations:
        preview = conv.last_message.replace("\n", " ")[:60]
        click.echo(
            f"{click.style(conv.name, bold=True)}  ({conv.message_count} msgs, {_format_ts(conv.last_timestamp)})"
        )
        click.echo(f"  ID: {conv.id}")
        if preview:
            click.echo(f"  {preview}")


@cli.command()
@click.argument("key")
@click.option("-n", "--limit", type=int, default=None, help="Only show the last N messages")
def show(key: str, limit: int | None):
    """Print a chat transcript. KEY is a chat id or name."""
    from .library import find_conversation, is_own_message

    with _open_store() as store:
        conversations = store.load_conversations()
        my_name = store.get_my_name()

    conv = find_conversation(conversations, key)
    if conv is None:
        raise click.ClickException(f"Chat not found: {key}")

    messages = conv.messages[-limit:] if limit else conv.messages
    click.echo(click.style(f"# {conv.name}", bold=True))
    click.echo(f"Messages: {conv.message_count}")
    click.echo()
    for msg in messages:
        if msg.is_system:
            click.echo(click.style(f"-- {msg.text} ({msg.date} {msg.time})", dim=True))
            continue
        color = "green" if is_own_message(msg, my_name) else "cyan"
        click.echo(f"{click.style(msg.sender, fg=color, bold=True)} [{msg.date} {msg.time}]")
        click.echo(msg.text)
        click.echo()


@cli.command()
@click.argument("key")
def delete(key: str):
    """Delete one chat. KEY is a chat id or name."""
    from .library import find_conversation, remove_conversation

    with _open_store() as store:
        conversations = store.load_conversations()
        conv = find_conversation(conversations, key)
        if conv is None:
            raise click.ClickException(f"Chat not found: {key}")
        store.save_conversations(remove_conversation(conversations, conv.id))

    click.echo(f"Deleted '{conv.name}'")


@cli.command()
@click.argument("new_name", required=False)
def name(new_name: str | None):
    """Show or set your own name, used to highlight your messages."""
    with _open_store() as store:
        if new_name is not None:
            store.set_my_name(new_name)
        click.echo(store.get_my_name())


@cli.command()
def stats():
    """Show statistics about your imported chats."""
    if not STORE_PATH.exists():
        click.echo("No data found. Import a chat export first:")
        click.echo("  whatsapp-reader import ~/Downloads/chat.txt")
        return

    from .library import collection_stats

    with _open_store() as store:
        s = collection_stats(store.load_conversations())
        imports = store.list_imports(limit=1)

    click.echo()
    click.echo(click.style("WhatsApp Import Statistics", bold=True))
    click.echo(f"  Chats:          {s['total_conversations']:,}")
    click.echo(f"  Messages:       {s['total_messages']:,}")
    click.echo(f"  Avg msgs/chat:  {s['avg_messages_per_conversation']}")
    if s["date_range_start"]:
        click.echo(f"  Date range:     {s['date_range_start']} → {s['date_range_end']}")
    if s["top_senders"]:
        click.echo("  Top senders:")
        for entry in s["top_senders"]:
            click.echo(f"    {entry['sender']}: {entry['count']:,}")
    if imports:
        click.echo(f"  Last import:    {imports[0]['import_time']}")
    click.echo(f"  Location:       {DATA_DIR}")
    click.echo()


@cli.command()
def serve():
    """Start the MCP server (stdio transport)."""
    if not STORE_PATH.exists():
        click.echo("Warning: No data imported yet. Import a chat export first:", err=True)
        click.echo("  whatsapp-reader import ~/Downloads/chat.txt", err=True)

    from .server import mcp

    mcp.run(transport="stdio")


@cli.command()
@click.confirmation_option(prompt="This will delete all imported chats. Are you sure?")
def reset():
    """Delete all imported data and start fresh."""
    if DATA_DIR.exists():
        shutil.rmtree(DATA_DIR)
        click.echo(f"Deleted {DATA_DIR}")
    else:
        click.echo("No data to delete.")
