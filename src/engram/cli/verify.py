"""engram verify — check the integrity of the hash chain.

Output (success):
  ✓ Chain verified: 47 entries
    First: 000001_a1b2c3d4.md (2025-01-15)
    Latest: 000047_f9e8d7c6.md (2025-06-12)

Exit codes: 0 verified, 1 chain broken, 2 not initialized.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from engram.chain.verifier import verify_chain
from engram.cli.errors import (
    EXIT_CHAIN_BROKEN,
    EXIT_CONFIG,
    EXIT_NOT_INITIALIZED,
    err_chain,
    err_config,
    err_not_initialized,
)
from engram.config import ConfigError
from engram.errors import ChainError, NotInitializedError
from engram.store import Store

console = Console()

_DEFAULT_ROOT = Path(".")


def verify_cmd(
    root: Annotated[
        Path,
        typer.Option("--root", "-r", help="Project root. Defaults to current directory."),
    ] = _DEFAULT_ROOT,
) -> None:
    """Verify that every entry links to its predecessor and matches its filename hash."""
    try:
        store = Store.open(root.resolve())
    except ConfigError as exc:
        console.print(err_config(str(exc)))
        raise typer.Exit(EXIT_CONFIG)

    try:
        report = verify_chain(store)
    except NotInitializedError:
        console.print(err_not_initialized(store.engram_dir))
        raise typer.Exit(EXIT_NOT_INITIALIZED)
    except ChainError as exc:
        console.print(err_chain(exc), soft_wrap=True)
        raise typer.Exit(EXIT_CHAIN_BROKEN)

    console.print(f"[green]✓[/] Chain verified: {report.count} entries")
    if report.first is not None:
        console.print(f"  First: {report.first.filename} ({report.first.day})")
    if report.latest is not None:
        console.print(f"  Latest: {report.latest.filename} ({report.latest.day})")
