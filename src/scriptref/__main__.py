"""CLI entry point for scriptref."""

from __future__ import annotations

import json
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from scriptref import __version__
from scriptref.catalog import get_catalog
from scriptref.config import Settings
from scriptref.engine.models import Reference, build_reference
from scriptref.engine.scanner import scan_text

console = Console()
settings = Settings()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _reference_table(references: list[Reference], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Reference", style="bold")
    table.add_column("Type", style="cyan")
    table.add_column("Book #", justify="right")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Verses", justify="right")
    table.add_column("Valid")

    for ref in references:
        table.add_row(
            ref.reference,
            ref.reference_type.value if ref.reference_type else "-",
            str(ref.book_number) if ref.book_number is not None else "-",
            f"{ref.start_chapter_number}:{ref.start_verse_number}",
            f"{ref.end_chapter_number}:{ref.end_verse_number}",
            str(len(ref.verses)),
            "[green]yes[/green]" if ref.is_valid else "[red]no[/red]",
        )
    return table


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    default=None,
    help="Log level (default: SCRIPTREF_LOG_LEVEL or WARNING)",
)
def cli(log_level: str | None):
    """scriptref - find and resolve Bible references."""
    _configure_logging(log_level or settings.log_level)


@cli.command()
@click.argument("text")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def scan(text: str, output_json: bool):
    """Find references in TEXT.

    Example: scriptref scan "I hope Matt 2:4 and James 5:1-5 get parsed"
    """
    references = scan_text(text)

    if output_json or settings.output_format == "json":
        click.echo(json.dumps([ref.to_dict() for ref in references], indent=2))
        return

    if not references:
        console.print("[yellow]No references found[/yellow]")
        return

    console.print(_reference_table(references, f"{len(references)} reference(s)"))


@cli.command()
@click.argument("book")
@click.argument("start_chapter", type=int, required=False)
@click.argument("start_verse", type=int, required=False)
@click.argument("end_chapter", type=int, required=False)
@click.argument("end_verse", type=int, required=False)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.option("--strict", is_flag=True, help="Exit with status 1 if invalid")
def ref(
    book: str,
    start_chapter: int | None,
    start_verse: int | None,
    end_chapter: int | None,
    end_verse: int | None,
    output_json: bool,
    strict: bool,
):
    """Resolve BOOK and optional boundaries into a full reference.

    Example: scriptref ref Genesis 2 3 4 5
    """
    reference = build_reference(book, start_chapter, start_verse, end_chapter, end_verse)

    if output_json or settings.output_format == "json":
        click.echo(json.dumps(reference.to_dict(), indent=2))
    else:
        console.print(_reference_table([reference], reference.reference))

    if strict and not reference.is_valid:
        console.print(f"[red]Error: {reference.reference} is not a valid reference[/red]")
        sys.exit(1)


@cli.command()
def books():
    """List the books of the catalog."""
    catalog = get_catalog()

    table = Table(title=f"Books ({catalog.path})")
    table.add_column("#", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("OSIS", style="cyan")
    table.add_column("Abbr", style="cyan")
    table.add_column("Short", style="cyan")
    table.add_column("Chapters", justify="right")
    table.add_column("Verses", justify="right")

    for entry in catalog.books:
        table.add_row(
            str(entry.number),
            entry.name,
            entry.osis,
            entry.abbr,
            entry.short,
            str(entry.chapter_count),
            str(sum(entry.verse_counts)),
        )

    console.print(table)


if __name__ == "__main__":
    cli()
