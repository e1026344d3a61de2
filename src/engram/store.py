"""The on-disk worklog store rooted at an explicit project directory.

Layout (names configurable via engram.yaml, see engram.config):

  <root>/.engram/
    AGENTS.md             — protocol instructions for agents
    draft.md              — the pending-work draft
    worklog/
      SUMMARY.md          — index ledger (derived, rebuildable)
      000001_<hash>.md    — chain entries (authoritative)
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from engram.config import EngramConfig, load_config
from engram.errors import AlreadyInitializedError, NotInitializedError
from engram.templates import AGENTS_TEMPLATE, DRAFT_TEMPLATE, SUMMARY_TEMPLATE

DRAFT_NAME = "draft.md"
AGENTS_NAME = "AGENTS.md"
INDEX_NAME = "SUMMARY.md"


@dataclass
class Store:
    root: Path
    config: EngramConfig = field(default_factory=EngramConfig)

    @classmethod
    def open(cls, root: Path) -> "Store":
        """Return a Store for *root* with engram.yaml / env config applied."""
        return cls(root=root, config=load_config(root))

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    @property
    def engram_dir(self) -> Path:
        return self.root / self.config.store.dir

    @property
    def worklog_dir(self) -> Path:
        return self.engram_dir / self.config.store.worklog

    @property
    def draft_path(self) -> Path:
        return self.engram_dir / DRAFT_NAME

    @property
    def agents_path(self) -> Path:
        return self.engram_dir / AGENTS_NAME

    @property
    def index_path(self) -> Path:
        return self.worklog_dir / INDEX_NAME

    @property
    def sequence_width(self) -> int:
        return self.config.store.sequence_width

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def is_initialized(self) -> bool:
        return self.engram_dir.is_dir() and self.worklog_dir.is_dir()

    def require_initialized(self) -> None:
        """Raise NotInitializedError unless the store and worklog dirs exist."""
        if not self.is_initialized():
            raise NotInitializedError(self.engram_dir)

    def initialize(self) -> list[Path]:
        """Create the store layout and return the files written.

        Raises:
            AlreadyInitializedError: if the store directory already exists.
        """
        if self.engram_dir.exists():
            raise AlreadyInitializedError(self.engram_dir)

        self.worklog_dir.mkdir(parents=True)

        created: list[Path] = []
        for path, content in (
            (self.agents_path, AGENTS_TEMPLATE),
            (self.draft_path, DRAFT_TEMPLATE),
            (self.index_path, SUMMARY_TEMPLATE),
        ):
            path.write_text(content, encoding="utf-8")
            created.append(path)
        return created

    def reset_draft(self) -> None:
        write_atomic(self.draft_path, DRAFT_TEMPLATE)


def write_atomic(path: Path, content: str) -> None:
    """Write *content* to *path* atomically (temp → rename).

    Creates parent directories if needed. Line endings are written verbatim.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def write_exclusive(path: Path, content: str) -> None:
    """Create *path* with *content*, flushed to disk.

    Raises:
        FileExistsError: if *path* already exists.
    """
    with open(path, "x", encoding="utf-8", newline="") as f:
        f.write(content)
        f.flush()
        os.fsync(f.fileno())
