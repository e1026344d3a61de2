"""Tests for engram rich error messages."""

from __future__ import annotations

from pathlib import Path

import pytest

from engram.cli.errors import (
    EXIT_CHAIN_BROKEN,
    EXIT_INVALID_DRAFT,
    EXIT_NOT_INITIALIZED,
    EXIT_OK,
    err_already_initialized,
    err_chain,
    err_config,
    err_draft_not_found,
    err_invalid_draft,
    err_not_initialized,
)
from engram.errors import (
    ChainBroken,
    EmptyBody,
    HashMismatch,
    MissingPreviousLine,
    MissingSummaryTag,
    PreviousEntryNotFound,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _has_action(msg: str) -> bool:
    """Every error must contain a cause AND an actionable instruction."""
    lower = msg.lower()
    return any(kw in lower for kw in ["run:", "edit ", "fix ", "use ", "recreate"])


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


def test_exit_codes_are_distinct() -> None:
    codes = {EXIT_OK, EXIT_CHAIN_BROKEN, EXIT_NOT_INITIALIZED, EXIT_INVALID_DRAFT}
    assert codes == {0, 1, 2, 3}


# ---------------------------------------------------------------------------
# Environment errors
# ---------------------------------------------------------------------------


def test_err_not_initialized_points_to_init() -> None:
    msg = err_not_initialized(Path("/proj/.engram"))
    assert "/proj/.engram" in msg
    assert "engram init" in msg


def test_err_already_initialized() -> None:
    msg = err_already_initialized(Path("/proj/.engram"))
    assert "already initialized" in msg
    assert _has_action(msg)


def test_err_draft_not_found() -> None:
    msg = err_draft_not_found(Path("/proj/.engram/draft.md"))
    assert "draft.md" in msg
    assert "engram commit" in msg


def test_err_config_includes_message() -> None:
    msg = err_config("store.sequence_width must be an integer >= 1")
    assert "sequence_width" in msg
    assert _has_action(msg)


def test_paths_with_markup_are_escaped() -> None:
    msg = err_not_initialized(Path("/proj/[red]/.engram"))
    assert "\\[red]" in msg


# ---------------------------------------------------------------------------
# Draft errors
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("error", [MissingSummaryTag(), EmptyBody()])
def test_err_invalid_draft(error) -> None:
    msg = err_invalid_draft(error, Path(".engram/draft.md"))
    assert str(error) in msg
    assert "engram commit" in msg


# ---------------------------------------------------------------------------
# Chain errors
# ---------------------------------------------------------------------------


def test_err_chain_broken_shows_both_links() -> None:
    msg = err_chain(ChainBroken("000003_a1b2c3d4.md", "e" * 64, "0" * 64))
    assert "Chain broken at entry 000003_a1b2c3d4.md" in msg
    assert "Expected Previous: " + "e" * 64 in msg
    assert "Found Previous:    " + "0" * 64 in msg
    assert _has_action(msg)


def test_err_hash_mismatch_shows_both_hashes() -> None:
    msg = err_chain(HashMismatch("000002_e5f6a7b8.md", "deadbeef", "e5f6a7b8"))
    assert "Hash mismatch at 000002_e5f6a7b8.md" in msg
    assert "Content hashes to: deadbeef" in msg
    assert "Filename claims:   e5f6a7b8" in msg


def test_err_missing_previous_line() -> None:
    msg = err_chain(MissingPreviousLine("000001_a1b2c3d4.md"))
    assert "000001_a1b2c3d4.md" in msg
    assert _has_action(msg)


def test_err_previous_entry_not_found() -> None:
    msg = err_chain(PreviousEntryNotFound(4))
    assert "sequence 4" in msg
    assert "engram verify" in msg
