"""Draft parser.

The draft (``.engram/draft.md``) is the agent's scratch document between
commits. It holds exactly one ``<summary>...</summary>`` pair followed by
free-text sections. HTML comments are template placeholders and do not count
as content.

Usage:
    draft = parse_draft(path.read_text(encoding="utf-8"))
    print(draft.summary)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from engram.errors import DraftNotFoundError, EmptyBody, EmptySummary, MissingSummaryTag

# Single line only: a summary that spans lines is not a summary.
_SUMMARY_RE = re.compile(r"<summary>(.*?)</summary>")
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)


@dataclass
class Draft:
    summary: str
    body: str


def strip_comments(text: str) -> str:
    """Remove every ``<!-- ... -->`` span from *text*."""
    return _COMMENT_RE.sub("", text)


def parse_draft(document: str) -> Draft:
    """Extract and validate the summary and body of a draft document.

    Raises:
        MissingSummaryTag: no ``<summary>...</summary>`` pair on a single line.
        EmptySummary: the summary is blank after trimming.
        EmptyBody: nothing but whitespace and comments after the summary.
    """
    match = _SUMMARY_RE.search(document)
    if match is None:
        raise MissingSummaryTag()

    summary = match.group(1).strip()
    if not summary:
        raise EmptySummary()

    body = document[match.end():].strip()
    if not strip_comments(body).strip():
        raise EmptyBody()

    return Draft(summary=summary, body=body)


def load_draft(draft_path: Path) -> Draft:
    """Read and parse the draft file at *draft_path*."""
    if not draft_path.is_file():
        raise DraftNotFoundError(draft_path)
    return parse_draft(draft_path.read_text(encoding="utf-8"))
