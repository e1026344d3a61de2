"""Entry codec: canonical serialization of a worklog entry.

Layout (exact, ``\\n`` line endings, no trailing newline added):

    Summary: <summary>
    Previous: <none | 64 lowercase hex>
    Date: <YYYY-MM-DDTHH:MM:SSZ>

    ---

    <body>

The verifier re-derives every hash from these bytes, so field order,
whitespace and the date format are frozen. Header fields are decoded one line
rule per field and do not depend on their order in the file.

Filenames: ``<zero-padded sequence>_<8 hex short hash>.md``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
NO_PREVIOUS = "none"
SEPARATOR = "\n\n---\n\n"

_PREVIOUS_RE = re.compile(r"^(none|[0-9a-f]{64})$")
_FILENAME_RE = re.compile(r"^(\d+)_([0-9a-f]{8})\.md$")


@dataclass
class EntryFields:
    """The four stored fields of a chain entry."""

    summary: str
    previous: str  # NO_PREVIOUS or the predecessor's full digest
    date: datetime
    body: str


@dataclass
class EntryFile:
    """A worklog entry as discovered on disk (from its filename only)."""

    sequence: int
    short_hash: str
    filename: str
    path: Path

    def read(self) -> str:
        return read_entry_text(self.path)

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


# ------------------------------------------------------------------
# Encode / decode
# ------------------------------------------------------------------


def format_date(value: datetime) -> str:
    """Format *value* as UTC. Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(DATE_FORMAT)


def parse_date(value: str) -> datetime:
    return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)


def encode(fields: EntryFields) -> str:
    """Serialize *fields* to the canonical entry text."""
    return (
        f"Summary: {fields.summary}\n"
        f"Previous: {fields.previous}\n"
        f"Date: {format_date(fields.date)}"
        f"{SEPARATOR}"
        f"{fields.body}"
    )


def decode_field(content: str, field_name: str) -> str | None:
    """Return the value of the first ``<field_name>: `` line, or None."""
    prefix = f"{field_name}: "
    for line in content.split("\n"):
        if line.startswith(prefix):
            return line[len(prefix):].removesuffix("\r")
    return None


def parse_previous(content: str) -> str | None:
    """Return the ``Previous:`` link if present and structurally valid."""
    value = decode_field(content, "Previous")
    if value is None or not _PREVIOUS_RE.match(value):
        return None
    return value


def decode(content: str) -> EntryFields:
    """Parse canonical entry text back into its fields.

    Raises:
        ValueError: a header field is missing or the separator is absent.
    """
    head, sep, body = content.partition(SEPARATOR)
    if not sep:
        raise ValueError("Entry has no '---' separator")

    values: dict[str, str] = {}
    for name in ("Summary", "Previous", "Date"):
        value = decode_field(head, name)
        if value is None:
            raise ValueError(f"Entry has no '{name}:' line")
        values[name] = value

    return EntryFields(
        summary=values["Summary"],
        previous=values["Previous"],
        date=parse_date(values["Date"]),
        body=body,
    )


# ------------------------------------------------------------------
# Filenames + file IO
# ------------------------------------------------------------------


def entry_filename(sequence: int, short_hash: str, width: int = 6) -> str:
    return f"{sequence:0{width}d}_{short_hash}.md"


def parse_entry_filename(filename: str, directory: Path) -> EntryFile | None:
    """Return an EntryFile for a worklog filename, or None if it is not one."""
    match = _FILENAME_RE.match(filename)
    if not match:
        return None
    return EntryFile(
        sequence=int(match.group(1)),
        short_hash=match.group(2),
        filename=filename,
        path=directory / filename,
    )


def read_entry_text(path: Path) -> str:
    """Read an entry's text with no newline translation.

    Invalid UTF-8 is replaced rather than raised: hashes are always taken
    over the raw bytes (EntryFile.read_bytes), so a damaged file still
    reaches the hash check.
    """
    return path.read_bytes().decode("utf-8", errors="replace")
