"""Tests for chain/draft.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from engram.chain.draft import load_draft, parse_draft, strip_comments
from engram.errors import (
    DraftError,
    DraftNotFoundError,
    EmptyBody,
    EmptySummary,
    MissingSummaryTag,
)
from engram.templates import DRAFT_TEMPLATE

_VALID = """<summary>Added new feature</summary>

## Intent
This is the intent section.

## Changes
- Modified file.py

## Verification
Ran tests."""


# ------------------------------------------------------------------
# parse_draft — valid drafts
# ------------------------------------------------------------------


def test_parse_valid_draft() -> None:
    draft = parse_draft(_VALID)
    assert draft.summary == "Added new feature"
    assert draft.body.startswith("## Intent")
    assert draft.body.endswith("Ran tests.")


def test_summary_is_trimmed() -> None:
    draft = parse_draft("<summary>   padded   </summary>\nBody text")
    assert draft.summary == "padded"


def test_body_is_trimmed() -> None:
    draft = parse_draft("<summary>S</summary>\n\n\n  Body text  \n\n")
    assert draft.body == "Body text"


def test_body_keeps_comments_when_real_content_present() -> None:
    draft = parse_draft("<summary>S</summary>\n<!-- hint -->\nReal content")
    assert "<!-- hint -->" in draft.body
    assert "Real content" in draft.body


def test_text_before_summary_is_not_body() -> None:
    draft = parse_draft("Preamble\n<summary>S</summary>\nBody")
    assert draft.body == "Body"


# ------------------------------------------------------------------
# parse_draft — rejections
# ------------------------------------------------------------------


def test_missing_summary_tag() -> None:
    with pytest.raises(MissingSummaryTag):
        parse_draft("No summary tag here")


def test_multiline_summary_is_not_a_summary() -> None:
    with pytest.raises(MissingSummaryTag):
        parse_draft("<summary>line one\nline two</summary>\nBody")


def test_empty_summary() -> None:
    with pytest.raises(EmptySummary):
        parse_draft("<summary></summary>\n\n## Intent\nSome content")


def test_whitespace_summary() -> None:
    with pytest.raises(EmptySummary):
        parse_draft("<summary>   </summary>\nSome content")


def test_empty_body_comments_only() -> None:
    with pytest.raises(EmptyBody):
        parse_draft("<summary>Summary here</summary>\n\n<!-- just comments -->")


def test_empty_body_multiline_comment() -> None:
    with pytest.raises(EmptyBody):
        parse_draft("<summary>Summary here</summary>\n<!--\n  spans\n  lines\n-->\n")


def test_empty_body_nothing_after_summary() -> None:
    with pytest.raises(EmptyBody):
        parse_draft("<summary>Summary here</summary>")


def test_template_is_not_committable() -> None:
    with pytest.raises(EmptySummary):
        parse_draft(DRAFT_TEMPLATE)


def test_template_with_summary_but_no_report() -> None:
    """Headings left in the template still count as body text."""
    doc = DRAFT_TEMPLATE.replace("<summary></summary>", "<summary>Done</summary>")
    draft = parse_draft(doc)
    assert draft.summary == "Done"


def test_draft_errors_share_base_class() -> None:
    for exc in (MissingSummaryTag(), EmptySummary(), EmptyBody()):
        assert isinstance(exc, DraftError)
        assert isinstance(exc, ValueError)


# ------------------------------------------------------------------
# strip_comments / load_draft
# ------------------------------------------------------------------


def test_strip_comments_removes_all_spans() -> None:
    assert strip_comments("a<!-- x -->b<!--\ny\n-->c") == "abc"


def test_load_draft_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DraftNotFoundError):
        load_draft(tmp_path / "draft.md")


def test_load_draft_reads_file(tmp_path: Path) -> None:
    p = tmp_path / "draft.md"
    p.write_text(_VALID, encoding="utf-8")
    assert load_draft(p).summary == "Added new feature"
