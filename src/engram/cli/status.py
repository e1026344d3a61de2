"""engram status command.

Shows the worklog overview: entry count + latest entry, draft state, and the
chain verification result. Read-only.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from engram.chain.draft import load_draft
from engram.chain.entry import decode_field
from engram.chain.sequence import list_entries
from engram.chain.verifier import verify_chain
from engram.cli.errors import EXIT_CONFIG, EXIT_NOT_INITIALIZED, err_config, err_not_initialized
from engram.config import ConfigError
from engram.errors import ChainError, DraftError, DraftNotFoundError
from engram.store import Store

console = Console()

_DEFAULT_ROOT = Path(".")


class DraftState(Enum):
    HAS_CONTENT = "has_content"
    EMPTY = "empty"
    NOT_FOUND = "not_found"


def status_cmd(
    root: Annotated[
        Path,
        typer.Option("--root", "-r", help="Project root. Defaults to current directory."),
    ] = _DEFAULT_ROOT,
) -> None:
    """Show worklog history, draft state and chain integrity."""
    try:
        store = Store.open(root.resolve())
    except ConfigError as exc:
        console.print(err_config(str(exc)))
        raise typer.Exit(EXIT_CONFIG)

    if not store.is_initialized():
        console.print(err_not_initialized(store.engram_dir))
        raise typer.Exit(EXIT_NOT_INITIALIZED)

    console.print("[bold]Engram Status[/]")

    # ---- Panel 1: History ----
    _show_history_panel(store)

    # ---- Panel 2: Draft ----
    _show_draft_panel(store)

    # ---- Panel 3: Chain ----
    _show_chain_panel(store)


# ---------------------------------------------------------------------------
# Panel renderers
# ---------------------------------------------------------------------------


def _show_history_panel(store: Store) -> None:
    entries = list_entries(store.worklog_dir)
    lines = [f"History: [bold]{len(entries)}[/] entries"]

    if entries:
        latest = entries[-1]
        content = latest.read()
        date = decode_field(content, "Date") or "unknown"
        summary = decode_field(content, "Summary") or "No summary"
        lines.append(f"Latest:  {latest.filename} ({date})")
        lines.append(f'         "{escape(summary)}"')

    console.print(Panel("\n".join(lines), title="[bold]Worklog[/]", expand=False))


def _show_draft_panel(store: Store) -> None:
    state, summary = draft_state(store.draft_path)

    if state is DraftState.HAS_CONTENT:
        text = (
            "Draft:   [yellow]Has content[/] (uncommitted work)\n"
            f'         Summary: "{escape(summary or "")}"\n'
            "  Run:  engram commit"
        )
    elif state is DraftState.EMPTY:
        text = "Draft:   Empty (ready for new work)"
    else:
        text = f"Draft:   [yellow]Not found[/] ({escape(str(store.draft_path))})"

    console.print(Panel(text, title="[bold]Draft[/]", expand=False))


def _show_chain_panel(store: Store) -> None:
    try:
        verify_chain(store)
    except ChainError as exc:
        text = f"Chain:   [red]✗ {escape(str(exc))}[/]\n  Run:  engram verify  for details"
    else:
        text = "Chain:   [green]✓ Verified[/]"

    console.print(Panel(text, title="[bold]Integrity[/]", expand=False))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def draft_state(draft_path: Path) -> tuple[DraftState, str | None]:
    """Classify the draft; the summary is returned only when it has content."""
    try:
        draft = load_draft(draft_path)
    except DraftNotFoundError:
        return DraftState.NOT_FOUND, None
    except DraftError:
        return DraftState.EMPTY, None
    return DraftState.HAS_CONTENT, draft.summary
