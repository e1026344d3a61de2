"""Engram error taxonomy.

Every failure the core can raise carries a distinguishing type so that the
CLI can map it to its own exit code:

  environment           NotInitializedError, AlreadyInitializedError, DraftNotFoundError
  input validation      DraftError (MissingSummaryTag, EmptySummary, EmptyBody)
  structural corruption ChainError (PreviousEntryNotFound, MissingPreviousLine,
                        ChainBroken, HashMismatch)

Filesystem failures are never wrapped: they surface as the original OSError.
"""

from __future__ import annotations

from pathlib import Path


class EngramError(Exception):
    """Base class for all Engram errors."""


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


class NotInitializedError(EngramError):
    """The store directory (or its worklog directory) does not exist."""

    def __init__(self, store_dir: Path) -> None:
        self.store_dir = store_dir
        super().__init__(f"Engram not initialized at '{store_dir}'. Run `engram init` first.")


class AlreadyInitializedError(EngramError):
    def __init__(self, store_dir: Path) -> None:
        self.store_dir = store_dir
        super().__init__(f"Engram already initialized at '{store_dir}'.")


class DraftNotFoundError(EngramError):
    def __init__(self, draft_path: Path) -> None:
        self.draft_path = draft_path
        super().__init__(f"Draft not found: '{draft_path}'.")


# ---------------------------------------------------------------------------
# Input validation (draft)
# ---------------------------------------------------------------------------


class DraftError(EngramError, ValueError):
    """The draft cannot be committed as it stands; edit it and retry."""


class MissingSummaryTag(DraftError):
    def __init__(self) -> None:
        super().__init__("Missing <summary> tag in draft.md")


class EmptySummary(DraftError):
    def __init__(self) -> None:
        super().__init__("Summary cannot be empty. Fill in the <summary> tag.")


class EmptyBody(DraftError):
    def __init__(self) -> None:
        super().__init__("Draft body is empty. Document your changes.")


# ---------------------------------------------------------------------------
# Structural corruption (chain)
# ---------------------------------------------------------------------------


class ChainError(EngramError):
    """The persisted worklog is broken, incomplete or has been tampered with."""


class PreviousEntryNotFound(ChainError):
    """Commit could not locate the entry it must link to."""

    def __init__(self, sequence: int) -> None:
        self.sequence = sequence
        super().__init__(f"Previous entry with sequence {sequence} not found")


class MissingPreviousLine(ChainError):
    """An entry has no decodable ``Previous:`` header."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"Missing 'Previous:' line in {filename}")


class ChainBroken(ChainError):
    """An entry's ``Previous:`` value does not match its predecessor's digest."""

    def __init__(self, filename: str, expected: str, found: str) -> None:
        self.filename = filename
        self.expected = expected
        self.found = found
        super().__init__(f"Chain broken at entry {filename}")


class HashMismatch(ChainError):
    """An entry's content no longer hashes to the value embedded in its filename."""

    def __init__(self, filename: str, computed: str, claimed: str) -> None:
        self.filename = filename
        self.computed = computed
        self.claimed = claimed
        super().__init__(f"Hash mismatch at {filename}")
