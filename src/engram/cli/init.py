"""engram init — create the worklog store and agent directives.

Creates:
  .engram/AGENTS.md            — protocol instructions for agents
  .engram/draft.md             — empty draft template
  .engram/worklog/SUMMARY.md   — index ledger header

Directive files (the "## Engram Protocol" block):
  --warp    WARP.md
  --junie   .junie/guidelines.md
  --agents  AGENTS.md (project root)
  --all     all of the above

Without flags, init runs in detection mode: the directive is appended only to
those files that already exist. A file that already carries the directive is
skipped, so re-running never duplicates it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from engram.cli.errors import (
    EXIT_ALREADY_INITIALIZED,
    EXIT_CONFIG,
    err_already_initialized,
    err_config,
)
from engram.config import ConfigError
from engram.errors import AlreadyInitializedError
from engram.store import Store
from engram.templates import DIRECTIVE_MARKER, ROOT_DIRECTIVE_TEMPLATE

console = Console()

_DEFAULT_ROOT = Path(".")

# (flag name, path relative to the project root)
DIRECTIVE_TARGETS: tuple[tuple[str, Path], ...] = (
    ("warp", Path("WARP.md")),
    ("junie", Path(".junie") / "guidelines.md"),
    ("agents", Path("AGENTS.md")),
)


def init_cmd(
    root: Annotated[
        Path,
        typer.Option("--root", "-r", help="Project root. Defaults to current directory."),
    ] = _DEFAULT_ROOT,
    warp: Annotated[
        bool,
        typer.Option("--warp", help="Create or append to WARP.md with the Engram directive."),
    ] = False,
    junie: Annotated[
        bool,
        typer.Option("--junie", help="Create or append to .junie/guidelines.md."),
    ] = False,
    agents: Annotated[
        bool,
        typer.Option("--agents", help="Create or append to AGENTS.md in the project root."),
    ] = False,
    all_: Annotated[
        bool,
        typer.Option("--all", help="Apply --warp, --junie and --agents."),
    ] = False,
) -> None:
    """Initialize Engram in the project directory."""
    root = root.resolve()
    try:
        store = Store.open(root)
    except ConfigError as exc:
        console.print(err_config(str(exc)))
        raise typer.Exit(EXIT_CONFIG)

    try:
        created = store.initialize()
    except AlreadyInitializedError:
        console.print(err_already_initialized(store.engram_dir))
        raise typer.Exit(EXIT_ALREADY_INITIALIZED)

    console.print(f"Initialized Engram in {escape(str(root))}")
    for path in created:
        console.print(f"  [green]✓[/] Created: {escape(_relative(root, path))}")

    selected = {"warp": warp or all_, "junie": junie or all_, "agents": agents or all_}
    explicit = any(selected.values())

    for flag, rel in DIRECTIVE_TARGETS:
        target = root / rel
        if not selected[flag] and (explicit or not target.exists()):
            continue
        _install_directive(target, rel)


# ---------------------------------------------------------------------------
# Directive files
# ---------------------------------------------------------------------------


def install_directive(target: Path) -> str:
    """Add the Engram directive to *target*.

    Returns one of "created", "appended", "skipped".
    """
    if not target.exists():
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(ROOT_DIRECTIVE_TEMPLATE, encoding="utf-8")
        return "created"

    existing = target.read_text(encoding="utf-8")
    if DIRECTIVE_MARKER in existing:
        return "skipped"

    separator = "" if existing.endswith("\n\n") else ("\n" if existing.endswith("\n") else "\n\n")
    with target.open("a", encoding="utf-8") as f:
        f.write(separator + ROOT_DIRECTIVE_TEMPLATE)
    return "appended"


def _install_directive(target: Path, rel: Path) -> None:
    outcome = install_directive(target)
    if outcome == "created":
        console.print(f"  [green]✓[/] Created: {rel}")
    elif outcome == "appended":
        console.print(f"  [green]✓[/] Appended directive: {rel}")
    else:
        console.print(f"  [dim]Skipped: {rel} (directive already present)[/]")


def _relative(base: Path, path: Path) -> str:
    try:
        return str(path.relative_to(base))
    except ValueError:
        return str(path)
