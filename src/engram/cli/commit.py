"""engram commit — append the current draft to the hash-linked worklog.

Output:
  Committed: 000002_e5f6a7b8.md
  Summary: Added JWT authentication to the login endpoint
  Previous: a1b2c3d4...
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from engram.chain.entry import NO_PREVIOUS
from engram.chain.linker import commit
from engram.cli.errors import (
    EXIT_CHAIN_BROKEN,
    EXIT_CONFIG,
    EXIT_INVALID_DRAFT,
    EXIT_NOT_INITIALIZED,
    err_chain,
    err_config,
    err_draft_not_found,
    err_invalid_draft,
    err_not_initialized,
)
from engram.config import ConfigError
from engram.errors import ChainError, DraftError, DraftNotFoundError, NotInitializedError
from engram.store import Store

console = Console()

_DEFAULT_ROOT = Path(".")


def commit_cmd(
    root: Annotated[
        Path,
        typer.Option("--root", "-r", help="Project root. Defaults to current directory."),
    ] = _DEFAULT_ROOT,
) -> None:
    """Commit the current draft to the hash-linked worklog."""
    try:
        store = Store.open(root.resolve())
    except ConfigError as exc:
        console.print(err_config(str(exc)))
        raise typer.Exit(EXIT_CONFIG)

    try:
        result = commit(store)
    except NotInitializedError:
        console.print(err_not_initialized(store.engram_dir))
        raise typer.Exit(EXIT_NOT_INITIALIZED)
    except DraftNotFoundError:
        console.print(err_draft_not_found(store.draft_path))
        raise typer.Exit(EXIT_INVALID_DRAFT)
    except DraftError as exc:
        console.print(err_invalid_draft(exc, store.draft_path))
        raise typer.Exit(EXIT_INVALID_DRAFT)
    except ChainError as exc:
        console.print(err_chain(exc), soft_wrap=True)
        raise typer.Exit(EXIT_CHAIN_BROKEN)

    console.print(f"Committed: {result.filename}")
    console.print(f"Summary: {escape(result.summary)}", soft_wrap=True)
    console.print(f"Previous: {_short_previous(result.previous)}")


def _short_previous(previous: str) -> str:
    if previous == NO_PREVIOUS:
        return NO_PREVIOUS
    return f"{previous[:8]}..."
