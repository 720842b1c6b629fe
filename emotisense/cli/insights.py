"""Analytics commands for EmotiSense CLI.

Renders pattern findings, summary statistics and emotional vocabulary
for the configured user's recent entries.
"""

from datetime import date, timedelta
from typing import Optional

import click
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from emotisense.cli.errors import fail
from emotisense.models import (
    ConsistencyResult,
    EmotionCount,
    JournalEntry,
    PatternFinding,
)

console = Console()


def _get_config() -> dict:
    """Lazily load configuration."""
    from emotisense.config import load_config

    return load_config()


def _get_store(config: dict):
    """Get the journal store instance."""
    from emotisense.config import get_db_path
    from emotisense.db.store import JournalStore

    return JournalStore(get_db_path(config))


def fetch_recent_entries(config: dict, days: Optional[int] = None) -> list[JournalEntry]:
    """Fetch the entries analytics run over.

    Args:
        config: Loaded configuration.
        days: Window size in days. Uses the configured default if None.

    Returns:
        Up to the configured limit of entries from the window, plus
        undated entries, which still count for keyword and frequency
        analysis.
    """
    from emotisense.config import get_analysis_days, get_entry_limit, get_user_id

    window = days if days is not None else get_analysis_days(config)
    store = _get_store(config)
    return store.get_entries(
        user_id=get_user_id(config),
        from_date=date.today() - timedelta(days=window),
        limit=get_entry_limit(config),
        include_undated=True,
    )


def _colored(emotion: str) -> str:
    from emotisense.analysis.emotions import get_emotion_color

    return f"[{get_emotion_color(emotion)}]{escape(emotion)}[/]"


def render_finding(finding: PatternFinding) -> Panel:
    """Build a panel showing a finding's data and insight."""
    data = finding.data

    if isinstance(data, ConsistencyResult):
        body = (
            f"[bold]{data.consistent_days}[/bold] of "
            f"[bold]{data.total_transitions}[/bold] day transitions shared an emotion"
        )
    elif data and isinstance(data[0], EmotionCount):
        body = Table(show_header=True, header_style="bold cyan", box=None)
        body.add_column("Emotion")
        body.add_column("Count", justify="right")
        for row in data:
            body.add_row(_colored(row.emotion), str(row.count))
    else:
        body = Table(show_header=True, header_style="bold cyan", box=None)
        body.add_column("Key", style="bold")
        body.add_column("Dominant")
        body.add_column("Count", justify="right")
        body.add_column("Emotions", style="dim")
        for group in data:
            body.add_row(
                escape(group.key),
                _colored(group.dominant_emotion),
                str(group.frequency),
                escape(", ".join(group.emotions)),
            )

    return Panel(
        Group(body, "", f"[italic]{escape(finding.insight)}[/italic]"),
        title=f"[bold]{finding.title}[/bold]",
        border_style="cyan",
    )


@click.command()
@click.option(
    "--days",
    type=int,
    default=None,
    help="Days of history to analyze. Defaults to the configured window (30).",
)
def patterns(days: Optional[int]) -> None:
    """Discover patterns in your recent entries.

    Looks for your most common emotions, day-to-day consistency,
    time-of-day and weekday patterns, situational triggers, and
    physical sensations that go along with emotions.

    \b
    Examples:
      emotisense patterns            # Last 30 days
      emotisense patterns --days 90  # Last quarter
    """
    from emotisense.analysis import analyze_patterns
    from emotisense.config import get_situational_terms, get_timezone

    config = _get_config()

    try:
        tz = get_timezone(config)
    except ValueError as e:
        fail(str(e), title="Configuration Error")

    entries = fetch_recent_entries(config, days)
    findings = analyze_patterns(
        entries,
        tz=tz,
        situational_terms=get_situational_terms(config),
    )

    if not findings:
        console.print(Panel(
            f"[dim]Not enough data yet ({len(entries)} entries).[/dim]\n\n"
            "Keep journaling; patterns appear after a few entries.",
            title="[bold]Patterns[/bold]",
            border_style="dim",
        ))
        return

    console.print(f"[dim]Analyzed {len(entries)} entries[/dim]\n")
    for finding in findings:
        console.print(render_finding(finding))


@click.command()
@click.option(
    "--days",
    type=int,
    default=None,
    help="Days of history to summarize. Defaults to the configured window (30).",
)
def stats(days: Optional[int]) -> None:
    """Show journaling statistics.

    Total entries, average emotions per entry, most common emotion,
    current and longest streak, plus a 7-day emotion trend.
    """
    from emotisense.analysis import calculate_stats, daily_emotion_counts, emotion_distribution

    config = _get_config()
    entries = fetch_recent_entries(config, days)
    summary = calculate_stats(entries)

    table = Table(title="Journal Statistics", show_header=False, box=None)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Total entries", str(summary.total_entries))
    table.add_row("Avg emotions / entry", f"{summary.avg_emotions_per_entry:.1f}")
    table.add_row(
        "Most common emotion",
        _colored(summary.most_common_emotion) if summary.most_common_emotion else "-",
    )
    table.add_row("Current streak", f"{summary.streak_days} days")
    table.add_row("Longest streak", f"{summary.longest_streak} days")
    table.add_row("Emotional vocabulary", str(summary.vocabulary_size))
    table.add_row("Average confidence", f"{summary.average_confidence:.0%}")

    console.print(table)

    trend = daily_emotion_counts(entries, days=7)
    peak = max(trend.values()) or 1
    console.print("\n[bold]Emotions detected, last 7 days[/bold]")
    for day, count in trend.items():
        bar = "█" * round(20 * count / peak)
        console.print(f"  {day.strftime('%b %d')}  [cyan]{bar}[/cyan] {count}")

    distribution = emotion_distribution(entries)
    if distribution:
        console.print("\n[bold]Emotion distribution[/bold]")
        for emotion, count in distribution.items():
            console.print(f"  {_colored(emotion.capitalize())}: {count}")


@click.command()
@click.option(
    "--days",
    type=int,
    default=None,
    help="Days of history to examine. Defaults to the configured window (30).",
)
def vocabulary(days: Optional[int]) -> None:
    """Show the emotional vocabulary you have used.

    Lists every distinct emotion detected, when it appeared, and
    figurative phrases ("it feels like...") from your entries.
    """
    from emotisense.analysis import analyze_vocabulary

    config = _get_config()
    report = analyze_vocabulary(fetch_recent_entries(config, days))

    if not report.vocabulary_size:
        console.print(Panel(
            "[dim]No emotions recorded yet[/dim]",
            title="[bold]Emotional Vocabulary[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title=f"Emotional Vocabulary ({report.vocabulary_size} emotions)",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Emotion")
    table.add_column("Times", justify="right")
    table.add_column("Last seen", style="dim")

    for emotion in report.unique_emotions:
        seen = report.emotion_evolution.get(emotion, [])
        table.add_row(
            _colored(emotion),
            str(len(seen)),
            max(seen) if seen else "-",
        )

    console.print(table)
    console.print(f"[bold]Growth rate:[/bold] {report.growth_rate:.2f} new emotions per entry")

    if report.metaphors:
        console.print("\n[bold]Your metaphors[/bold]")
        for metaphor in report.metaphors:
            when = f"[dim]{metaphor.date}[/dim] " if metaphor.date else ""
            console.print(f"  {when}\"{escape(metaphor.text)}\"")
