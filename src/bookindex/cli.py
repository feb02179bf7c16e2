"""Book Index Builder CLI."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from bookindex.backends import MemoryBackend, PdfBackend
from bookindex.config import Settings
from bookindex.exceptions import BookIndexError
from bookindex.loader import load_records, sort_records
from bookindex.models import LayoutReport
from bookindex.pipeline import LayoutDriver, normalize_all

app = typer.Typer(
    name="bookindex",
    help="Build a sectioned, two-column book index from topic/page records",
    add_completion=False,
)
console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _build_settings(
    filler_text: Optional[str],
    filler_lines: Optional[int],
    margin: Optional[float],
    columns: Optional[int],
    verbose: bool,
) -> Settings:
    overrides = {}
    if filler_text is not None:
        overrides["filler_text"] = filler_text
    if filler_lines is not None:
        overrides["filler_blank_lines"] = filler_lines
    if margin is not None:
        for side in ("top", "bottom", "left", "right"):
            overrides[f"margin_{side}_pt"] = margin
    if columns is not None:
        overrides["columns"] = columns
    if verbose:
        overrides["log_level"] = "DEBUG"
    return Settings(**overrides)


def _load(csv_path: Path, header: Optional[bool], skip_empty: bool) -> list:
    records = sort_records(load_records(csv_path, has_header=header))
    # Normalize everything before the backend sees a command
    return normalize_all(records, skip_empty=skip_empty)


def _print_sections(report: LayoutReport) -> None:
    table = Table(title="Sections")
    table.add_column("Key", style="bold")
    table.add_column("Entries", justify="right")
    table.add_column("First topic")
    table.add_column("Start page", justify="right")
    table.add_column("Filler", justify="center")

    for section in report.sections:
        table.add_row(
            section.key,
            str(section.entry_count),
            section.first_topic,
            str(section.start_page) if section.start_page else "-",
            "yes" if section.filler_inserted else "",
        )
    console.print(table)
    console.print(
        f"[dim]{report.entry_count} entries, {report.section_count} sections, "
        f"{report.filler_pages} filler pages[/dim]"
    )


@app.command()
def build(
    csv_path: Path = typer.Argument(..., help="CSV file of topic, description, page, book"),
    output: Path = typer.Option(Path("index.pdf"), "--output", "-o", help="Output PDF path"),
    header: Optional[bool] = typer.Option(None, "--header/--no-header", help="First row is a header (default: detect)"),
    skip_empty: bool = typer.Option(False, help="Skip records with empty topics instead of failing"),
    filler_text: Optional[str] = typer.Option(None, help="Text printed on filler pages"),
    filler_lines: Optional[int] = typer.Option(None, help="Blank lines above the filler text"),
    margin: Optional[float] = typer.Option(None, help="Page margin in points (all sides)"),
    columns: Optional[int] = typer.Option(None, help="Number of text columns"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Lay out an index CSV into a PDF."""
    try:
        settings = _build_settings(filler_text, filler_lines, margin, columns, verbose)
        _configure_logging(settings.log_level)
        console.print(f"[bold blue]Building index:[/bold blue] {csv_path}")

        entries = _load(csv_path, header, skip_empty)
        with PdfBackend(settings) as backend:
            report = LayoutDriver(backend, settings=settings).run(entries)
            backend.save(output)
    except (BookIndexError, FileNotFoundError, ValueError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1)

    _print_sections(report)
    console.print(f"[green]Wrote {report.final_page_count or 0} pages to {output}[/green]")


@app.command()
def preview(
    csv_path: Path = typer.Argument(..., help="CSV file of topic, description, page, book"),
    header: Optional[bool] = typer.Option(None, "--header/--no-header", help="First row is a header (default: detect)"),
    skip_empty: bool = typer.Option(False, help="Skip records with empty topics instead of failing"),
    paragraphs_per_page: Optional[int] = typer.Option(
        None, help="Simulated paragraphs per page (default: one page per section)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Show the section plan without writing a PDF."""
    try:
        settings = _build_settings(None, None, None, None, verbose)
        _configure_logging(settings.log_level)

        entries = _load(csv_path, header, skip_empty)
        backend = MemoryBackend(paragraphs_per_page=paragraphs_per_page)
        report = LayoutDriver(backend, settings=settings).run(entries)
    except (BookIndexError, FileNotFoundError, ValueError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1)

    _print_sections(report)


@app.command("settings")
def show_settings() -> None:
    """Show the effective configuration."""
    table = Table(title="Settings")
    table.add_column("Name", style="bold")
    table.add_column("Value")
    for name, value in Settings().model_dump().items():
        table.add_row(name, str(value))
    console.print(table)


if __name__ == "__main__":
    app()
