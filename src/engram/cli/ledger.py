"""Index ledger commands.

Commands:
  engram log [-n N]   — show the most recent rows of worklog/SUMMARY.md
  engram reindex      — rebuild SUMMARY.md by replaying the entry files
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from engram.chain.index import read_rows, rebuild_index
from engram.cli.errors import EXIT_CONFIG, EXIT_NOT_INITIALIZED, err_config, err_not_initialized
from engram.config import ConfigError
from engram.store import Store

console = Console()

_DEFAULT_ROOT = Path(".")


def log_cmd(
    root: Annotated[
        Path,
        typer.Option("--root", "-r", help="Project root. Defaults to current directory."),
    ] = _DEFAULT_ROOT,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", min=0, help="Show only the last N entries (0 = all)."),
    ] = 0,
) -> None:
    """List committed entries from the index ledger."""
    store = _open_initialized(root)

    rows = read_rows(store.index_path)
    if not rows:
        console.print("[dim]No entries yet.[/]  Fill in .engram/draft.md and run:  engram commit")
        return

    shown = rows[-limit:] if limit else rows

    table = Table(title="Engram Worklog", show_header=True, header_style="bold")
    table.add_column("Entry", style="bold", no_wrap=True)
    table.add_column("Summary")
    for row in shown:
        table.add_row(row.filename, escape(row.summary))

    console.print(table)
    console.print(f"\n  {len(shown)}/{len(rows)} entries")


def reindex_cmd(
    root: Annotated[
        Path,
        typer.Option("--root", "-r", help="Project root. Defaults to current directory."),
    ] = _DEFAULT_ROOT,
) -> None:
    """Rebuild worklog/SUMMARY.md from the entry files."""
    store = _open_initialized(root)

    count = rebuild_index(store)
    console.print(f"[green]✓[/] Rebuilt {store.index_path.name}: {count} entries")


def _open_initialized(root: Path) -> Store:
    try:
        store = Store.open(root.resolve())
    except ConfigError as exc:
        console.print(err_config(str(exc)))
        raise typer.Exit(EXIT_CONFIG)

    if not store.is_initialized():
        console.print(err_not_initialized(store.engram_dir))
        raise typer.Exit(EXIT_NOT_INITIALIZED)
    return store
