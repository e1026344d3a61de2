"""Content hashing for worklog entries.

SHA-256 over the UTF-8 bytes of the text, lowercase hex. No normalisation:
a single changed byte (line endings included) changes the digest. Raw bytes
read from disk are hashed as-is, so corrupted files hash without decoding.
"""

from __future__ import annotations

import hashlib

SHORT_HASH_LEN = 8


def digest(content: str | bytes) -> str:
    """Return the 64-character hex SHA-256 digest of *content*."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def short_digest(content: str | bytes) -> str:
    """Return the first 8 characters of :func:`digest`."""
    return digest(content)[:SHORT_HASH_LEN]
