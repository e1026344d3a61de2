"""Static text written by ``engram init`` and by every commit (draft reset).

The chain engine treats these as opaque: only the draft parser's notion of an
"empty" draft (blank summary, comment-only body) ties DRAFT_TEMPLATE to it.
"""

from __future__ import annotations

DIRECTIVE_MARKER = "Engram Protocol"

DRAFT_TEMPLATE = """<summary></summary>

## Intent
<!-- Why was this change made? What problem does it solve? -->

## Changes
<!-- List specific files and functions modified -->

## Verification
<!-- How did you test or validate this change? -->
"""

SUMMARY_TEMPLATE = """# Engram Worklog

| Entry | Summary |
|-------|---------|
"""

AGENTS_TEMPLATE = """# Engram Protocol: Agent Instructions

This project uses Engram for persistent agent memory. Follow this protocol for all work sessions.

## Before Starting Work

1. Read `.engram/draft.md` to check for unfinished work
2. If draft contains work-in-progress, either:
   - Resume and complete that work, OR
   - Document why you are abandoning it and commit
3. Read `.engram/worklog/SUMMARY.md` to understand recent project history

## After Completing Work

1. Update `.engram/draft.md` with your work report:
   - Fill in the `<summary>` tag with ONE sentence describing the change
   - Document Intent: why the change was made
   - Document Changes: specific files and functions modified
   - Document Verification: how you tested/validated
2. Run `engram commit` to finalize the entry

## Rules

- **NEVER** modify files in `.engram/worklog/` directly
- **NEVER** leave `draft.md` empty after doing work
- **NEVER** manually calculate or enter hashes
- **ALWAYS** run `engram commit` to finalize work (the tool handles hashing)

## Data Security

**NEVER log, record, or include sensitive data in ANY Engram documentation.**

- Passwords, passphrases, API keys, tokens, private keys or certificates
- Connection strings with credentials, secret environment variables
- Personal identifying information (PII)

Reference secrets by name only (e.g. "Rotated the DATABASE_PASSWORD variable").
Worklog entries are permanent: anything committed stays in the history.

## Verifying Worklog Integrity

Run `engram verify` to validate the hash chain at any time.

Each worklog entry contains the SHA256 hash of the previous entry's content:
- If any historical entry is modified, its hash changes
- This breaks the link from the next entry
- `engram verify` detects this immediately

The hash in the filename is the hash of that file's own content.
"""

ROOT_DIRECTIVE_TEMPLATE = """## Engram Protocol (MANDATORY)

This project uses Engram for agent memory. You MUST follow this workflow:

### Before Starting Work
1. Read `.engram/draft.md` to check for unfinished work
2. If the draft has content, resume that task OR document why you're abandoning it

### After Completing ANY Task
1. Update `.engram/draft.md` with your work report:
   - `<summary>` tag: ONE sentence describing the change
   - Intent, Changes and Verification sections
2. Run `engram commit` to finalize

### Rules
- NEVER modify files in `.engram/worklog/`
- NEVER log sensitive data (passwords, API keys, tokens, PII)
- If uncertain, read `.engram/AGENTS.md` for the full protocol
"""
