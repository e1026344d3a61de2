"""Chain verifier: walk the worklog in sequence order and check every link.

For each entry, in ascending sequence:
  a. decode ``Previous:``            → MissingPreviousLine if absent/invalid
  b. compare with the expected link  → ChainBroken (expected, found)
  c. recompute the short hash        → HashMismatch (computed, claimed)
  d. expected link = digest(raw bytes)

Hashes are taken over the raw file bytes; headers are decoded leniently, so
a file with invalid UTF-8 still fails at (c) rather than crashing.

The first failure ends the walk; later entries are not examined. The
verifier only reads: it never repairs, rewrites or caches anything.
"""

from __future__ import annotations

from dataclasses import dataclass

from engram.chain.entry import NO_PREVIOUS, EntryFile, decode_field, parse_previous
from engram.chain.hashing import digest, short_digest
from engram.chain.sequence import list_entries
from engram.errors import ChainBroken, HashMismatch, MissingPreviousLine
from engram.store import Store


@dataclass
class EntryRef:
    filename: str
    date: str  # as stored in the Date: header, "unknown" if absent

    @property
    def day(self) -> str:
        """Date part only (YYYY-MM-DD)."""
        return self.date.split("T", 1)[0]


@dataclass
class VerifyReport:
    count: int
    first: EntryRef | None = None
    latest: EntryRef | None = None


def verify_entries(entries: list[EntryFile]) -> VerifyReport:
    """Verify an already-sorted list of entries (see module docstring)."""
    expected = NO_PREVIOUS
    first: EntryRef | None = None
    latest: EntryRef | None = None

    for entry in entries:
        raw = entry.read_bytes()
        content = raw.decode("utf-8", errors="replace")

        found = parse_previous(content)
        if found is None:
            raise MissingPreviousLine(entry.filename)

        if found != expected:
            raise ChainBroken(entry.filename, expected=expected, found=found)

        computed = short_digest(raw)
        if computed != entry.short_hash:
            raise HashMismatch(entry.filename, computed=computed, claimed=entry.short_hash)

        ref = EntryRef(entry.filename, decode_field(content, "Date") or "unknown")
        if first is None:
            first = ref
        latest = ref

        expected = digest(raw)

    return VerifyReport(count=len(entries), first=first, latest=latest)


def verify_chain(store: Store) -> VerifyReport:
    """Verify the whole worklog of *store*.

    Raises:
        NotInitializedError: the store layout is missing.
        ChainError: on the first broken link or hash mismatch.
    """
    store.require_initialized()
    return verify_entries(list_entries(store.worklog_dir))
