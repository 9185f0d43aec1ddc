"""Import pipeline: read transcript files → parse → merge → storage."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .config import TRANSCRIPT_SUFFIXES
from .library import select_imported
from .merger import merge_conversations
from .parser import parse_transcripts
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


def _expand_paths(paths: list[str]) -> list[Path]:
    files: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if not path.exists():
            raise click.ClickException(f"File not found: {raw}")
        if path.is_dir():
            found = sorted(
                p for p in path.iterdir() if p.is_file() and p.suffix.lower() in TRANSCRIPT_SUFFIXES
            )
            if not found:
                logger.warning("No transcripts found in %s", path)
            files.extend(found)
        else:
            files.append(path)
    return files


def _read_transcript(path: Path) -> str:
    try:
        # utf-8-sig drops the byte order mark some exports start with
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError:
        raise click.ClickException(f"Not a UTF-8 text file: {path}")
    except OSError as err:
        raise click.ClickException(f"Cannot read {path}: {err.strerror or err}")


def import_transcript_files(paths: list[str], store: KeyValueStore) -> dict:
    """Import WhatsApp .txt exports into the store.

    Every file is read before anything is parsed, so a read failure leaves
    the stored collection untouched. All files are merged against the same
    stored snapshot in one pass.

    Returns a summary dict with import statistics.
    """
    files = _expand_paths(paths)
    if not files:
        click.echo("No transcripts to import.")
        return {"imported": 0, "updated": 0, "messages": 0, "total": 0, "selected_id": None}

    sources = [(_read_transcript(path), path.name) for path in files]

    click.echo(f"Parsing {len(sources)} transcript(s)...")
    incoming = parse_transcripts(sources)

    previous = store.load_conversations()
    known = {conv.name.lower() for conv in previous}
    updated = sum(1 for conv in incoming if conv.name.lower() in known)

    merged = merge_conversations(previous, incoming)
    store.save_conversations(merged)

    total_messages = sum(conv.message_count for conv in incoming)
    store.record_import(
        file_paths=[str(path) for path in files],
        conversations=len(incoming),
        messages=total_messages,
    )

    selected = select_imported(merged, incoming)
    summary = {
        "imported": len(incoming),
        "updated": updated,
        "messages": total_messages,
        "total": len(merged),
        "selected_id": selected.id if selected else None,
    }

    click.echo()
    click.echo(click.style("Import complete!", fg="green", bold=True))
    click.echo(f"  Imported: {len(incoming)} conversations ({total_messages} messages)")
    if updated:
        click.echo(f"  Updated:  {updated} (already present, content replaced)")
    for conv in incoming:
        if conv.message_count == 0:
            click.echo(f"  Warning:  no messages recognized in '{conv.name}'", err=True)
    click.echo(f"  Library:  {len(merged)} conversations")

    return summary
