"""Commit path: turn the draft into the next linked worklog entry.

Steps, in this order:
  1. parse the draft                         (DraftError on bad input)
  2. allocate the next sequence              (from entry files only)
  3. link to the digest of entry sequence-1  (PreviousEntryNotFound if missing)
  4. encode + hash → filename
  5. create the entry file (exclusive, fsynced)
  6. append the index row
  7. reset the draft

Steps 5–7 are not transactional. A crash leaves the entry files ahead of the
index, never behind; ``engram reindex`` repairs the index.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from engram.chain.draft import load_draft
from engram.chain.entry import NO_PREVIOUS, EntryFields, encode, entry_filename
from engram.chain.hashing import digest, short_digest
from engram.chain.index import append_row
from engram.chain.sequence import find_entry, next_sequence
from engram.errors import PreviousEntryNotFound
from engram.store import Store, write_exclusive


@dataclass
class CommitResult:
    sequence: int
    filename: str
    summary: str
    previous: str


def previous_link(store: Store, sequence: int) -> str:
    """Return the link value for a new entry at *sequence*."""
    if sequence == 1:
        return NO_PREVIOUS

    prev = find_entry(store.worklog_dir, sequence - 1)
    if prev is None:
        raise PreviousEntryNotFound(sequence - 1)
    return digest(prev.read_bytes())


def commit(store: Store, now: datetime | None = None) -> CommitResult:
    """Commit the store's draft as a new chain entry.

    Args:
        store: An initialized store.
        now: Entry timestamp; defaults to the current UTC time. Truncated to
            whole seconds.

    Raises:
        NotInitializedError: the store layout is missing.
        DraftNotFoundError: draft.md is missing.
        DraftError: the draft has no summary or no body.
        PreviousEntryNotFound: the history has a gap below the new entry.
        FileExistsError: the target entry file already exists.
    """
    store.require_initialized()
    draft = load_draft(store.draft_path)

    sequence = next_sequence(p.name for p in store.worklog_dir.iterdir())
    previous = previous_link(store, sequence)

    timestamp = (now or datetime.now(timezone.utc)).replace(microsecond=0)
    content = encode(
        EntryFields(summary=draft.summary, previous=previous, date=timestamp, body=draft.body)
    )
    filename = entry_filename(sequence, short_digest(content), store.sequence_width)

    write_exclusive(store.worklog_dir / filename, content)
    append_row(store.index_path, filename, draft.summary)
    store.reset_draft()

    return CommitResult(
        sequence=sequence,
        filename=filename,
        summary=draft.summary,
        previous=previous,
    )
