"""Index ledger (SUMMARY.md): one ``| filename | summary |`` row per commit.

The ledger is a cache for quick scanning. Sequencing and linking never read
it, and rebuild_index() regenerates it from the entry files.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from engram.chain.entry import decode_field
from engram.chain.sequence import list_entries
from engram.store import Store, write_atomic
from engram.templates import SUMMARY_TEMPLATE

_SEPARATOR_ROW_RE = re.compile(r"^\|\s*-+\s*\|\s*-+\s*\|$")
# Split on pipes that are not escaped.
_CELL_SPLIT_RE = re.compile(r"(?<!\\)\|")


@dataclass
class IndexRow:
    filename: str
    summary: str


def format_row(filename: str, summary: str) -> str:
    cell = summary.replace("|", "\\|")
    return f"| {filename} | {cell} |\n"


def append_row(index_path: Path, filename: str, summary: str) -> None:
    """Append one row to the ledger, creating it with its header if missing."""
    if not index_path.exists():
        index_path.write_text(SUMMARY_TEMPLATE, encoding="utf-8")
    with index_path.open("a", encoding="utf-8") as f:
        f.write(format_row(filename, summary))


def read_rows(index_path: Path) -> list[IndexRow]:
    """Return ledger rows in file order. Title and header rows are skipped.

    Returns an empty list if the ledger does not exist.
    """
    if not index_path.exists():
        return []

    rows: list[IndexRow] = []
    for line in index_path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line.startswith("|") or _SEPARATOR_ROW_RE.match(line):
            continue
        cells = [c.strip() for c in _CELL_SPLIT_RE.split(line)[1:-1]]
        if len(cells) != 2 or cells == ["Entry", "Summary"]:
            continue
        rows.append(IndexRow(filename=cells[0], summary=cells[1].replace("\\|", "|")))
    return rows


def rebuild_index(store: Store) -> int:
    """Rewrite the ledger by replaying the entry files. Returns the row count."""
    store.require_initialized()

    lines = [SUMMARY_TEMPLATE]
    entries = list_entries(store.worklog_dir)
    for entry in entries:
        summary = decode_field(entry.read(), "Summary") or ""
        lines.append(format_row(entry.filename, summary))

    write_atomic(store.index_path, "".join(lines))
    return len(entries)
