"""Verso CLI: modernize archaic verse text and build a ranked token index.

Three commands: modernize, tokenize, validate.
Uses typer for argument parsing and rich for formatted terminal output.
"""

from __future__ import annotations

import time

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from core.config import DEFAULT_RULES_PATH, DEFAULT_STOPWORDS_PATH, load_registry, load_stopwords
from core.errors import VersoError
from core.indexer import TIE_BREAKS, index_verses
from core.modernizer import MODERNIZE_PASSES, modernize
from core.records import CSV_HAS_HEADER_ROW, read_verses, render_modernized, render_tokens, write_text
from core.text import DEFAULT_LOCALE
from core.validator import validate_config

__version__ = "1.0.0"

TITLE = f"Verso v{__version__}"

app = typer.Typer(help="Verso: modernize verse text and index its tokens.")
console = Console()


def _fail(err: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(err))}")
    raise typer.Exit(code=2)


def _elapsed_ms(start: float) -> str:
    return f"{(time.perf_counter() - start) * 1000:.0f}ms"


def _version_callback(value: bool) -> None:
    if value:
        console.print(TITLE)
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v", help="Print the version and exit",
        callback=_version_callback, is_eager=True,
    ),
):
    """Verso: modernize verse text and index its tokens."""


# ── modernize ───────────────────────────────────────────────────────


@app.command("modernize")
def modernize_cmd(
    input_path: str = typer.Option(..., "--input", "-i", help="Path to the input CSV (id, text)"),
    output_path: str = typer.Option(..., "--output", "-o", help="Path to the output CSV"),
    headers: bool = typer.Option(
        CSV_HAS_HEADER_ROW, "--headers/--no-headers", help="Input CSV has a header row"
    ),
    rules: str = typer.Option(DEFAULT_RULES_PATH, "--rules", help="Path to substitution rules JSON"),
    passes: int = typer.Option(MODERNIZE_PASSES, "--passes", min=1, help="Full substitution passes"),
    verbose: bool = typer.Option(False, "--verbose/--no-verbose", help="Print progress"),
):
    """Rewrite archaic words and phrases, preserving capitalization."""
    start = time.perf_counter()
    try:
        registry = load_registry(rules)
        if verbose:
            console.print(f"Loaded {len(registry)} substitution rules from {escape(rules)}")
        console.print(f"Reading {escape(input_path)}...")
        verses = read_verses(input_path, headers)
        with console.status(f"[bold blue]Modernizing {len(verses)} verses..."):
            result = modernize(verses, registry, passes)
        content = render_modernized(result)
        if verbose:
            console.print(f"Writing result to {escape(output_path)}...")
        write_text(output_path, content)
    except VersoError as err:
        _fail(err)

    table = Table(title="Modernization Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_row("Verses read", str(len(verses)))
    table.add_row("Rows written", str(sum(1 for v in result if v.id)))
    table.add_row("Changed", str(sum(1 for a, b in zip(verses, result) if a.text != b.text)))
    table.add_row("Passes", str(passes))
    console.print(table)
    console.print(f"Done in {_elapsed_ms(start)}!")


# ── tokenize ────────────────────────────────────────────────────────


@app.command("tokenize")
def tokenize_cmd(
    input_path: str = typer.Option(..., "--input", "-i", help="Path to the input CSV (id, text)"),
    output_path: str = typer.Option(..., "--output", "-o", help="Path to the output CSV"),
    headers: bool = typer.Option(
        CSV_HAS_HEADER_ROW, "--headers/--no-headers", help="Input CSV has a header row"
    ),
    locale: str = typer.Option(DEFAULT_LOCALE, "--locale", "-l", help="Locale tag used for lowercasing"),
    stopwords: str = typer.Option(
        DEFAULT_STOPWORDS_PATH, "--stopwords", help="Path to stopwords JSON"
    ),
    tie_break: str = typer.Option(
        "first-seen", "--tie-break", help=f"Order of equally frequent tokens: {' | '.join(TIE_BREAKS)}"
    ),
    verbose: bool = typer.Option(False, "--verbose/--no-verbose", help="Print progress"),
):
    """Build a token → verse-ids index, ranked by verse count."""
    start = time.perf_counter()
    if tie_break not in TIE_BREAKS:
        console.print(f"[red]Error: --tie-break must be one of {list(TIE_BREAKS)}[/red]")
        raise typer.Exit(code=1)

    try:
        words = load_stopwords(stopwords, locale)
        console.print(f"Tokenizing {escape(input_path)}...")
        verses = read_verses(input_path, headers)
        if verbose:
            console.print(f"Found {len(verses)} verses...")
        with console.status("[bold blue]Indexing tokens..."):
            entries = index_verses(verses, words, locale, tie_break)
        if verbose:
            console.print(f"Writing {len(entries)} tokens to {escape(output_path)}...")
        write_text(output_path, render_tokens(entries))
    except VersoError as err:
        _fail(err)

    table = Table(title="Tokenization Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_row("Verses", str(len(verses)))
    table.add_row("Unique tokens", str(len(entries)))
    table.add_row("Stopwords", str(len(words)))
    table.add_row("Locale", locale)
    console.print(table)
    console.print(f"Done in {_elapsed_ms(start)}!")


# ── validate ────────────────────────────────────────────────────────


@app.command()
def validate(
    rules: str = typer.Option(DEFAULT_RULES_PATH, "--rules", help="Path to substitution rules JSON"),
    stopwords: str = typer.Option(
        DEFAULT_STOPWORDS_PATH, "--stopwords", help="Path to stopwords JSON"
    ),
    locale: str = typer.Option(DEFAULT_LOCALE, "--locale", "-l", help="Locale tag used for lowercasing"),
):
    """Check substitution rules, stopwords and locale for errors."""
    passed, errors = validate_config(rules, stopwords, locale)

    if passed:
        console.print(
            Panel("[bold green]✓ Validation passed[/bold green]", border_style="green")
        )
    else:
        console.print(
            Panel("[bold red]✗ Validation failed[/bold red]", border_style="red")
        )
        for err in errors:
            console.print(f"  [red]✗[/red] {escape(err)}")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
