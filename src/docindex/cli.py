"""Command line interface for docindex."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from docindex.config import AppConfig
from docindex.errors import MalformedIndexError
from docindex.index.search import Searcher
from docindex.index.store import IndexStore, write_index
from docindex.models import Category
from docindex.utils.files import compute_sha256, iter_index_paths


console = Console()
app = typer.Typer(help="docindex - inspect and search generated documentation search indexes")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _resolve_index(index: Path | None) -> Path:
    config = AppConfig(index_path=index if index is not None else AppConfig().index_path)
    resolved = config.resolve_index_path(Path.cwd())
    if not resolved.exists():
        raise typer.BadParameter(f"Index not found: {resolved}")
    return resolved


def _load_store(path: Path) -> IndexStore:
    try:
        return IndexStore.from_path(path)
    except MalformedIndexError as exc:
        console.print(f"[red]Malformed index {path}: {exc}[/red]")
        raise typer.Exit(code=1) from exc


def _parse_categories(values: Optional[List[str]]) -> list[Category] | None:
    if not values:
        return None
    try:
        return [Category(value) for value in values]
    except ValueError as exc:
        allowed = ", ".join(category.value for category in Category)
        raise typer.BadParameter(f"Unknown category; expected one of: {allowed}") from exc


@app.command()
def validate(
    inputs: List[Path] = typer.Argument(
        ..., help="Index files or documentation build directories.", resolve_path=True
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Check that every index file matches the record schema."""
    _setup_logging(verbose)
    paths = list(iter_index_paths(inputs))
    if not paths:
        console.print("[yellow]No index files found.[/yellow]")
        return

    failed = 0
    for path in paths:
        try:
            store = IndexStore.from_path(path)
        except MalformedIndexError as exc:
            failed += 1
            console.print(f"[red]FAIL[/red] {path}: {exc}")
            continue
        console.print(
            f"[green]OK[/green] {path}: {len(store)} records, sha256 {compute_sha256(path)[:12]}"
        )

    if failed:
        raise typer.Exit(code=1)


@app.command()
def show(
    index: Path = typer.Argument(None, help="Index file (defaults to the build output)"),
    category: Optional[List[str]] = typer.Option(None, "--category", "-c", help="Only these categories"),
    limit: int = typer.Option(50, help="Maximum number of records to display"),
    base_url: str = typer.Option(AppConfig().base_url, "--base-url", help="Prefix locations with this site URL"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List index records in generation order."""
    _setup_logging(verbose)
    store = _load_store(_resolve_index(index))
    categories = _parse_categories(category)
    records = store.by_category(*categories) if categories else list(store)

    if not records:
        console.print("[yellow]Index is empty.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Category")
    table.add_column("Location")
    table.add_column("Title")
    table.add_column("Text")

    for record in records[:limit]:
        table.add_row(
            record.category.value,
            record.url(base_url) or "/",
            record.title,
            record.text.replace("\n", " ")[:80],
        )

    console.print(table)
    if len(records) > limit:
        console.print(f"... {len(records) - limit} more records")


@app.command()
def pages(
    index: Path = typer.Argument(None, help="Index file (defaults to the build output)"),
) -> None:
    """Summarize the index per documentation page."""
    store = _load_store(_resolve_index(index))
    stats = store.stats()

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Page")
    table.add_column("Path")
    table.add_column("Records")
    table.add_column("Categories")
    for summary in store.pages():
        table.add_row(summary.page, summary.path or "/", str(summary.record_count), ", ".join(summary.categories))

    console.print(table)
    console.print(
        f"Records: {stats.record_count}, pages: {stats.page_count}, "
        + ", ".join(f"{name}: {count}" for name, count in stats.by_category.items())
    )


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    index: Path = typer.Option(None, "--index", help="Index file"),
    top_k: int = typer.Option(AppConfig().top_k, help="Number of results to display"),
    category: Optional[List[str]] = typer.Option(None, "--category", "-c", help="Only these categories"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search record titles and text."""
    _setup_logging(verbose)
    config = AppConfig()
    store = _load_store(_resolve_index(index))
    searcher = Searcher(store, title_boost=config.title_boost)

    results = searcher.search(query, top_k=max(top_k, 1), categories=_parse_categories(category))
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Location")
    table.add_column("Category")
    table.add_column("Snippet")

    for result in results:
        table.add_row(f"{result.score:.4f}", result.location or "/", result.category, result.snippet)

    console.print(table)


@app.command()
def convert(
    source: Path = typer.Argument(..., help="Index to read", exists=True, dir_okay=False),
    dest: Path = typer.Argument(..., help="Output path; .js gets the JavaScript wrapper"),
) -> None:
    """Re-serialize an index as JSON or as the JavaScript asset."""
    store = _load_store(source)
    dest.parent.mkdir(parents=True, exist_ok=True)
    write_index(store, dest)
    console.print(f"Wrote {len(store)} records to [bold]{dest}[/bold]")


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    index: Path = typer.Option(None, "--index", help="Index file"),
) -> None:
    """Start the web interface."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    from docindex.web.app import app as web_app

    config = AppConfig(index_path=index if index is not None else AppConfig().index_path)
    resolved = config.resolve_index_path(Path.cwd())
    if not resolved.exists():
        console.print("[yellow]Warning: index not found, requests might fail.[/yellow]")

    web_app.state.index_path = resolved
    console.print(f"Starting web interface on http://{host}:{port} (index: {resolved})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
