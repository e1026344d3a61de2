"""Engram rich error messages — actionable feedback.

Every error shown to the user must contain:
  1. What went wrong (clear cause)
  2. The exact action the user should take to fix it

Exit codes are shared by all commands so that scripts (and agents) can tell
the failure kinds apart.

Usage:
    from engram.cli.errors import EXIT_NOT_INITIALIZED, err_not_initialized
    console.print(err_not_initialized(store.engram_dir))
    raise typer.Exit(EXIT_NOT_INITIALIZED)
"""

from __future__ import annotations

from pathlib import Path

from rich.markup import escape

from engram.errors import ChainBroken, ChainError, DraftError, HashMismatch, MissingPreviousLine

EXIT_OK = 0
EXIT_CHAIN_BROKEN = 1
EXIT_ALREADY_INITIALIZED = 1
EXIT_CONFIG = 1
EXIT_NOT_INITIALIZED = 2
EXIT_INVALID_DRAFT = 3

_TAMPER_NOTE = "  The history has been tampered with or corrupted."


def err_not_initialized(store_dir: Path) -> str:
    """No .engram/ store (or no worklog directory) under the project root."""
    return (
        f"[red]Error:[/] Engram not initialized (no store at '{escape(str(store_dir))}').\n"
        "  Run:  engram init"
    )


def err_already_initialized(store_dir: Path) -> str:
    return (
        f"[red]Error:[/] Engram already initialized at '{escape(str(store_dir))}'.\n"
        "  Use the existing store, or remove the directory to start over."
    )


def err_draft_not_found(draft_path: Path) -> str:
    return (
        f"[red]Error:[/] Draft not found: '{escape(str(draft_path))}'.\n"
        "  Recreate it with a <summary>...</summary> line followed by your report,\n"
        "  then run:  engram commit"
    )


def err_invalid_draft(error: DraftError, draft_path: Path) -> str:
    """Draft fails validation (missing/empty summary, empty body)."""
    return (
        f"[red]Error:[/] {escape(str(error))}\n"
        f"  Edit {escape(str(draft_path))} and run:  engram commit"
    )


def err_config(message: str) -> str:
    return (
        f"[red]Error:[/] Invalid configuration.\n"
        f"  {escape(message)}\n"
        "  Fix engram.yaml or the ENGRAM_* environment variables."
    )


def err_chain(error: ChainError) -> str:
    """Describe a chain failure with the detail needed to diagnose it."""
    if isinstance(error, ChainBroken):
        return (
            f"[red]✗ Chain broken at entry {escape(error.filename)}[/]\n\n"
            f"  Expected Previous: {error.expected}\n"
            f"  Found Previous:    {error.found}\n\n"
            f"{_TAMPER_NOTE}\n"
            "  Run:  engram verify  after restoring the entry from version control."
        )
    if isinstance(error, HashMismatch):
        return (
            f"[red]✗ Hash mismatch at {escape(error.filename)}[/]\n\n"
            f"  Content hashes to: {error.computed}\n"
            f"  Filename claims:   {error.claimed}\n\n"
            f"{_TAMPER_NOTE}\n"
            "  Run:  engram verify  after restoring the entry from version control."
        )
    if isinstance(error, MissingPreviousLine):
        return (
            f"[red]✗ Missing or invalid 'Previous:' line in {escape(error.filename)}[/]\n\n"
            f"{_TAMPER_NOTE}\n"
            "  Run:  engram verify  after restoring the entry from version control."
        )
    return (
        f"[red]✗ {escape(str(error))}[/]\n\n"
        "  The worklog history is incomplete.\n"
        "  Run:  engram verify  to locate the first broken entry."
    )
