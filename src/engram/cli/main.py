"""Engram CLI entry point."""

from __future__ import annotations

import importlib.metadata
from typing import Annotated

import typer

from engram.cli.commit import commit_cmd
from engram.cli.init import init_cmd
from engram.cli.ledger import log_cmd, reindex_cmd
from engram.cli.status import status_cmd
from engram.cli.verify import verify_cmd


def _installed_version() -> str:
    try:
        return importlib.metadata.version("engram")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"engram {_installed_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="engram",
    help=(
        "Engram — persistent, tamper-evident memory for AI coding agents.\n\n"
        "  engram init     Set up .engram/ in the project.\n"
        "  engram commit   Append .engram/draft.md to the hash-linked worklog.\n"
        "  engram verify   Check every link and filename hash in the worklog."
    ),
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """Engram — persistent, tamper-evident memory for AI coding agents."""


app.command("init")(init_cmd)
app.command("commit")(commit_cmd)
app.command("verify")(verify_cmd)
app.command("status")(status_cmd)
app.command("log")(log_cmd)
app.command("reindex")(reindex_cmd)


@app.command("version")
def version_cmd() -> None:
    """Show the installed Engram version."""
    typer.echo(f"engram {_installed_version()}")


if __name__ == "__main__":
    app()
