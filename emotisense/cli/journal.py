"""Journal commands for EmotiSense CLI.

Handles writing, listing, showing, deleting and importing entries.
"""

import json
import logging
from datetime import date, timedelta
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from emotisense.cli.errors import fail

console = Console()
logger = logging.getLogger(__name__)


def _get_config() -> dict:
    """Lazily load configuration."""
    from emotisense.config import load_config

    return load_config()


def _get_store(config: dict):
    """Get the journal store instance."""
    from emotisense.config import get_db_path
    from emotisense.db.store import JournalStore

    return JournalStore(get_db_path(config))


def _parse_emotion_option(ctx, param, values: tuple[str, ...]) -> list[dict]:
    """Parse repeated NAME[:CONFIDENCE] options."""
    tags = []
    for value in values:
        name, _, confidence = value.partition(":")
        name = name.strip()
        if not name:
            raise click.BadParameter(f"Missing emotion name in '{value}'")
        try:
            score = float(confidence) if confidence else 1.0
        except ValueError:
            raise click.BadParameter(f"Invalid confidence in '{value}'")
        if not 0 <= score <= 1:
            raise click.BadParameter(f"Confidence must be between 0 and 1 in '{value}'")
        tags.append({"name": name, "confidence": score})
    return tags


def _parse_date_option(ctx, param, value: Optional[str]) -> Optional[date]:
    """Parse a YYYY-MM-DD option."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter("Invalid date format. Use YYYY-MM-DD.")


def format_emotions(tags) -> str:
    """Render emotion tags as colored rich markup."""
    from emotisense.analysis.emotions import get_emotion_color

    if not tags:
        return "[dim]-[/dim]"
    return ", ".join(
        f"[{get_emotion_color(tag.name)}]{escape(tag.name)}[/] [dim]{tag.confidence:.0%}[/dim]"
        for tag in tags
    )


def _truncate(text: str, max_length: int = 60) -> str:
    if len(text) <= max_length:
        return escape(text)
    return escape(text[:max_length].rstrip()) + "..."


@click.command()
@click.argument("text", required=False)
@click.option(
    "--date",
    "entry_date",
    callback=_parse_date_option,
    default=None,
    help="Date the entry belongs to (YYYY-MM-DD). Defaults to today.",
)
@click.option(
    "--emotion",
    "-e",
    "emotions",
    multiple=True,
    callback=_parse_emotion_option,
    help="Tag an emotion yourself as NAME[:CONFIDENCE]. Skips detection.",
)
def log(text: Optional[str], entry_date: Optional[date], emotions: list[dict]) -> None:
    """Write a journal entry.

    TEXT is your reflection. When omitted, your editor opens.
    Emotions are detected by the language model unless you tag them
    with --emotion.

    \b
    Examples:
      emotisense log "Loud office today, my head hurts"
      emotisense log "Quiet evening" -e calm:0.9 -e content:0.6
      emotisense log --date 2024-12-19 "Back-dated entry"
    """
    from emotisense.config import get_user_id
    from emotisense.models import EmotionMetadata, JournalEntry

    if text is None:
        text = click.edit("\n# Write your reflection above this line\n") or ""
        text = "\n".join(
            line for line in text.splitlines() if not line.startswith("#")
        )

    if not text.strip():
        fail("Entry text is required.")

    config = _get_config()
    store = _get_store(config)

    metadata = EmotionMetadata()
    fallback_error = None

    if not emotions:
        from emotisense.agents.base import get_model
        from emotisense.agents.detector import EmotionDetectorAgent

        with console.status("[bold cyan]Detecting emotions...[/bold cyan]"):
            detection = EmotionDetectorAgent(model=get_model(config)).detect(text)
        emotions = detection.primary_emotions
        metadata = detection.metadata
        if detection.fallback:
            fallback_error = detection.error

    entry = JournalEntry(
        date=entry_date or date.today(),
        text=text.strip(),
        emotions=emotions,
        metadata=metadata,
    )
    entry_id = store.save_entry(entry, user_id=get_user_id(config))

    console.print(Panel(
        f"{_truncate(entry.text, 200)}\n\n"
        f"[bold]Emotions:[/bold] {format_emotions(entry.emotions)}",
        title=f"[bold green]Entry #{entry_id} saved ({entry.date.isoformat()})[/bold green]",
        border_style="green",
    ))

    if fallback_error:
        console.print(
            f"[yellow]Emotion detection unavailable: {fallback_error}[/yellow]\n"
            f"[dim]Tag emotions yourself with --emotion NAME[:CONFIDENCE].[/dim]"
        )


@click.command()
@click.option(
    "--days",
    type=int,
    default=None,
    help="Only show entries from the last N days.",
)
@click.option(
    "--limit",
    type=int,
    default=20,
    show_default=True,
    help="Maximum number of entries to show.",
)
def logs(days: Optional[int], limit: int) -> None:
    """List recent journal entries.

    \b
    Examples:
      emotisense logs            # Latest 20 entries
      emotisense logs --days 7   # Last week
    """
    from emotisense.config import get_user_id

    config = _get_config()
    store = _get_store(config)

    from_date = date.today() - timedelta(days=days) if days is not None else None
    entries = store.get_entries(
        user_id=get_user_id(config),
        from_date=from_date,
        limit=limit,
    )

    if not entries:
        console.print(Panel(
            "[dim]No journal entries found[/dim]\n\n"
            "Write one with [cyan]emotisense log \"...\"[/cyan]",
            title="[bold]Journal[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title="Journal",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("ID", justify="right", style="dim")
    table.add_column("Date")
    table.add_column("Emotions")
    table.add_column("Entry")

    for entry in entries:
        table.add_row(
            str(entry.id),
            entry.date.isoformat() if entry.date else "[red]invalid[/red]",
            format_emotions(entry.emotions),
            _truncate(entry.text),
        )

    console.print(table)
    console.print(f"\n[bold]Entries shown:[/bold] {len(entries)}")


@click.command()
@click.argument("entry_id", type=int)
def show(entry_id: int) -> None:
    """Show a single entry with its emotion details.

    ENTRY_ID is the number shown by `emotisense logs`.
    """
    from emotisense.analysis.emotions import (
        calculate_emotion_intensity,
        get_emotion_category,
        get_emotion_color,
    )
    from emotisense.config import get_user_id

    config = _get_config()
    store = _get_store(config)
    entry = store.get_entry(entry_id, user_id=get_user_id(config))

    if entry is None:
        fail(f"Entry #{entry_id} not found.", title="Not Found")

    console.print(Panel(
        escape(entry.text),
        title=f"[bold]Entry #{entry_id}[/bold] [dim]{entry.date or 'undated'}[/dim]",
        border_style="cyan",
    ))

    if entry.emotions:
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Emotion")
        table.add_column("Category")
        table.add_column("Confidence", justify="right")
        table.add_column("Indicators", style="dim")

        for tag in entry.emotions:
            color = get_emotion_color(tag.name)
            table.add_row(
                f"[{color}]{escape(tag.name)}[/]",
                get_emotion_category(tag.name),
                f"{tag.confidence:.0%}",
                escape(", ".join(tag.indicators)),
            )
        console.print(table)

    metadata = entry.metadata
    console.print(
        f"\n[bold]Average confidence:[/bold] {calculate_emotion_intensity(entry.emotions):.0%}"
        f"  [bold]Intensity:[/bold] {metadata.intensity}/10"
        f"  [bold]Complexity:[/bold] {metadata.complexity}"
    )
    if metadata.sensory_elements:
        console.print(f"[bold]Sensory elements:[/bold] {', '.join(metadata.sensory_elements)}")
    if metadata.cognitive_patterns:
        console.print(f"[bold]Cognitive patterns:[/bold] {', '.join(metadata.cognitive_patterns)}")


@click.command()
@click.argument("entry_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Delete without asking.")
def delete(entry_id: int, yes: bool) -> None:
    """Delete a journal entry."""
    from emotisense.config import get_user_id

    config = _get_config()
    store = _get_store(config)

    if not yes and not click.confirm(f"Delete entry #{entry_id}?"):
        console.print("[dim]Cancelled[/dim]")
        return

    if not store.delete_entry(entry_id, user_id=get_user_id(config)):
        fail(f"Entry #{entry_id} not found.", title="Not Found")

    console.print(f"[green]Deleted entry #{entry_id}[/green]")


def load_import_records(payload) -> list[dict]:
    """Extract entry records from an export payload.

    Accepts a bare list, ``{"logs": [...]}`` or the API response shape
    ``{"data": {"logs": [...]}}``.

    Raises:
        ValueError: If no list of records is found.
    """
    if isinstance(payload, dict):
        payload = payload.get("data", payload)
        if isinstance(payload, dict):
            payload = payload.get("logs", payload.get("entries"))
    if not isinstance(payload, list):
        raise ValueError("Expected a list of entries")
    return [record for record in payload if isinstance(record, dict)]


@click.command(name="import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def import_entries(path: str) -> None:
    """Import entries from a JSON export.

    PATH is a JSON file holding a list of entries, either in EmotiSense's
    own format or the web app export format (userText, detectedEmotions).
    Records with malformed emotions are skipped; records with unparseable
    dates are imported as undated.
    """
    from emotisense.config import get_user_id
    from emotisense.models import JournalEntry

    try:
        with open(path, "r", encoding="utf-8") as f:
            records = load_import_records(json.load(f))
    except (json.JSONDecodeError, ValueError) as e:
        fail(f"Could not read {path}: {e}", title="Import Error")

    config = _get_config()
    store = _get_store(config)
    user_id = get_user_id(config)

    imported = 0
    skipped = 0

    with console.status(f"[bold cyan]Importing {len(records)} entries...[/bold cyan]"):
        for index, record in enumerate(records):
            try:
                entry = JournalEntry.from_record(record)
            except ValidationError as e:
                logger.warning("Skipping record %d: %s", index, e)
                skipped += 1
                continue
            store.save_entry(entry, user_id=user_id)
            imported += 1

    console.print(Panel(
        f"Imported: [green]{imported}[/green]\n"
        f"Skipped:  [yellow]{skipped}[/yellow] (malformed emotions)",
        title="[bold]Import Complete[/bold]",
        border_style="green" if not skipped else "yellow",
    ))
