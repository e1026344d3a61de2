"""Engram worklog chain engine — hashing, draft parsing, entry codec, commit, verify."""

from engram.chain.draft import Draft, parse_draft
from engram.chain.entry import EntryFields, EntryFile, decode, decode_field, encode
from engram.chain.hashing import digest, short_digest
from engram.chain.index import IndexRow, append_row, read_rows, rebuild_index
from engram.chain.linker import CommitResult, commit
from engram.chain.sequence import list_entries, next_sequence
from engram.chain.verifier import EntryRef, VerifyReport, verify_chain

__all__ = [
    "CommitResult",
    "Draft",
    "EntryFields",
    "EntryFile",
    "EntryRef",
    "IndexRow",
    "VerifyReport",
    "append_row",
    "commit",
    "decode",
    "decode_field",
    "digest",
    "encode",
    "list_entries",
    "next_sequence",
    "parse_draft",
    "read_rows",
    "rebuild_index",
    "short_digest",
    "verify_chain",
]
