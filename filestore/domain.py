"""Domain records held by the file store (Chunk, File, FileSummary)."""

from dataclasses import dataclass, field, replace
from typing import List, Optional


@dataclass(frozen=True)
class Chunk:
    """
    One fragment of a file at a caller-supplied position.
    """
    data: bytes
    index: int

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class File:
    """
    A named file owned by exactly one file table.

    Chunks are kept in append order, not index order.
    """
    name: str
    file_type: str
    uploaded_at: int
    project_id: Optional[str] = None
    chunks: List[Chunk] = field(default_factory=list)
    total_size: int = 0

    @property
    def chunk_count(self) -> int:
        return len(self.chunks)

    def copy(self) -> "File":
        """Return a detached copy safe to hand out of the table lock."""
        return replace(self, chunks=list(self.chunks))


@dataclass(frozen=True)
class FileSummary:
    """
    Per-file metadata returned by listings.
    """
    name: str
    size: int
    file_type: str
    project_id: Optional[str]
    uploaded_at: int
