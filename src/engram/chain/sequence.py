"""Sequence allocation from the worklog directory.

The entry files are the only source of truth: the index ledger is never
consulted, so an interrupted commit cannot make the allocator reuse a number.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from engram.chain.entry import EntryFile, parse_entry_filename


def next_sequence(filenames: Iterable[str]) -> int:
    """Return max(existing sequence) + 1, or 1 if there are no entries.

    Names that are not entry filenames (SUMMARY.md, editor backups, ...) are
    ignored. The result does not depend on iteration order.
    """
    sequences = [
        entry.sequence
        for name in filenames
        if (entry := parse_entry_filename(name, Path())) is not None
    ]
    return max(sequences, default=0) + 1


def list_entries(worklog_dir: Path) -> list[EntryFile]:
    """Return all entry files in *worklog_dir*, ascending by sequence.

    Returns an empty list if the directory does not exist.
    """
    if not worklog_dir.is_dir():
        return []

    entries = [
        entry
        for child in worklog_dir.iterdir()
        if child.is_file()
        and (entry := parse_entry_filename(child.name, worklog_dir)) is not None
    ]
    entries.sort(key=lambda e: (e.sequence, e.filename))
    return entries


def find_entry(worklog_dir: Path, sequence: int) -> EntryFile | None:
    for entry in list_entries(worklog_dir):
        if entry.sequence == sequence:
            return entry
    return None
