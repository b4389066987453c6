"""CLI interface using typer + rich."""

from __future__ import annotations

import logging
import webbrowser
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import httpx
import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from cv_renderer.cache.record_cache import RecordCache
from cv_renderer.config import AppConfig, load_config
from cv_renderer.export.generator import generate_document
from cv_renderer.export.html_page import render_html_page, save_html
from cv_renderer.export.profiles import PROFILES, get_profile
from cv_renderer.parsers.cv_loader import DataUnavailableError, load_cv, read_record
from cv_renderer.utils.metadata import touch_metadata

app = typer.Typer(
    name="cv-renderer",
    help="Render a CV record to PDF documents and an HTML page",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _cache(config: AppConfig) -> RecordCache:
    return RecordCache(
        db_path=config.cache.resolved_db_path,
        ttl_days=config.cache.ttl_days,
    )


@app.command()
def export(
    fmt: str = typer.Argument(None, metavar="FORMAT", help="full, resume or summary"),
    all_formats: bool = typer.Option(False, "--all", help="Export all three formats"),
    source: str = typer.Option(None, "--source", "-s", help="Record path or URL (overrides config)"),
    output_dir: Path = typer.Option(None, "--output-dir", "-o", help="Output directory for PDFs"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Export the CV as PDF in one or all formats."""
    _setup_logging(verbose)
    config = load_config()

    if all_formats:
        formats = list(PROFILES)
    else:
        fmt = fmt or config.export.default_format
        try:
            formats = [get_profile(fmt).name]
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

    source = source or config.data.source
    cache = _cache(config)
    try:
        # One fresh load per invocation, shared by every requested format.
        cv = load_cv(source, cache=cache, timeout=config.data.timeout)
    except DataUnavailableError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    for name in formats:
        path = generate_document(name, config=config, output_dir=output_dir, cv=cv)
        console.print(f"[green]Saved {PROFILES[name].label}: {path}[/green]")


@app.command()
def page(
    fmt: str = typer.Option("full", "--format", "-f", help="full, resume or summary"),
    source: str = typer.Option(None, "--source", "-s", help="Record path or URL (overrides config)"),
    output: Path = typer.Option(None, "--output", "-o", help="Output HTML path"),
    open_browser: bool = typer.Option(False, "--open", help="Open the page in a browser"),
) -> None:
    """Render the CV page as a standalone HTML file."""
    config = load_config()
    try:
        profile = get_profile(fmt)
        cv = load_cv(source or config.data.source, cache=_cache(config), timeout=config.data.timeout)
    except (ValueError, DataUnavailableError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if output is None:
        output = Path(config.export.output_dir) / f"cv_{profile.name}.html"
    path = save_html(render_html_page(cv, profile.name), output)
    console.print(f"[green]HTML saved: {path}[/green]")
    if open_browser:
        webbrowser.open(path.resolve().as_uri())


@app.command()
def validate(
    source: str = typer.Option(None, "--source", "-s", help="Record path or URL (overrides config)"),
) -> None:
    """Validate the record against the schema and show section counts."""
    config = load_config()
    source = source or config.data.source
    try:
        cv = read_record(source, timeout=config.data.timeout)
    except (httpx.HTTPError, OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid record {source}:[/red]\n{escape(str(e))}")
        raise typer.Exit(1)

    table = Table(title=f"{cv.personal.name.display} (v{cv.metadata.version})")
    table.add_column("Section")
    table.add_column("Entries", justify="right")
    counts = {
        "experience": len(cv.experience),
        "education": len(cv.education),
        "skills": len(cv.skill_groups()),
        "certifications": len(cv.certifications),
        "leadership": len(cv.leadership),
        "awards": len(cv.awards),
        "publications": len(cv.publications),
        "languages": len(cv.languages),
        "projects": len(cv.projects),
    }
    for name, count in counts.items():
        table.add_row(name, str(count))
    console.print(table)
    console.print("[green]Record is valid.[/green]")


@app.command()
def formats() -> None:
    """List the available document formats."""
    for profile in PROFILES.values():
        console.print(f"  [bold]{profile.name}[/bold]: {profile.label} - {profile.description}")


@app.command("touch-metadata")
def touch_metadata_cmd(
    path: Path = typer.Argument(help="JSON record to update"),
    bump: bool = typer.Option(True, "--bump/--no-bump", help="Bump the patch version"),
) -> None:
    """Stamp metadata.lastUpdated with today's date before a release."""
    if not path.exists():
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        metadata = touch_metadata(path, bump=bump)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(
        f"[green]Updated metadata: version {metadata['version']}, "
        f"lastUpdated {metadata['lastUpdated']}[/green]"
    )


if __name__ == "__main__":
    app()
