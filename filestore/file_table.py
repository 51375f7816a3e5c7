"""Per-owner file table: name -> File, with chunk append and queries."""

import threading
from typing import Dict, Iterator, List, Optional

from common.logging_config import get_logger
from filestore.domain import Chunk, File, FileSummary
from filestore.utils import get_current_timestamp

logger = get_logger(__name__)


class FileTable:
    """
    Mapping from file name to File record for a single owner.

    Every public method runs under the table's reentrant lock, so two
    operations on the same owner never observe a half-applied append.
    Callers that must combine several steps atomically (quota check then
    append) hold ``table.lock`` around them.
    """

    def __init__(self, files: Optional[Dict[str, File]] = None):
        self._files: Dict[str, File] = dict(files) if files else {}
        self.lock = threading.RLock()

    def append_chunk(
        self,
        name: str,
        data: bytes,
        index: int,
        file_type: str,
        project_id: Optional[str] = None,
    ) -> None:
        """
        Create the file on its first chunk, or append to an existing one.

        On append the file type is overwritten, while project_id and
        uploaded_at keep their existing values. Index values are stored as
        given; duplicates and gaps are accepted.
        """
        chunk = Chunk(data=data, index=index)
        with self.lock:
            file = self._files.get(name)
            if file is None:
                self._files[name] = File(
                    name=name,
                    file_type=file_type,
                    uploaded_at=get_current_timestamp(),
                    project_id=project_id,
                    chunks=[chunk],
                    total_size=chunk.size,
                )
                logger.debug(f"Created file '{name}' with chunk index={index} size={chunk.size}")
                return

            file.chunks.append(chunk)
            file.total_size += chunk.size
            file.file_type = file_type
            logger.debug(
                f"Appended chunk index={index} size={chunk.size} to '{name}' "
                f"(chunks={file.chunk_count}, total_size={file.total_size})"
            )

    def exists(self, name: str) -> bool:
        with self.lock:
            return name in self._files

    def list_metadata(self) -> List[FileSummary]:
        with self.lock:
            return [
                FileSummary(
                    name=file.name,
                    size=file.total_size,
                    file_type=file.file_type,
                    project_id=file.project_id,
                    uploaded_at=file.uploaded_at,
                )
                for file in self._files.values()
            ]

    def list_by_project(self, project_id: str) -> List[File]:
        """Return full records whose project_id equals project_id exactly."""
        with self.lock:
            return [
                file.copy()
                for file in self._files.values()
                if file.project_id is not None and file.project_id == project_id
            ]

    def chunk_count(self, name: str) -> int:
        with self.lock:
            file = self._files.get(name)
            return file.chunk_count if file is not None else 0

    def read_chunk(self, name: str, index: int) -> Optional[bytes]:
        """
        Return the data of the earliest-appended chunk with the given index.

        Returns None when the file or the index does not exist.
        """
        with self.lock:
            file = self._files.get(name)
            if file is None:
                return None
            for chunk in file.chunks:
                if chunk.index == index:
                    return chunk.data
            return None

    def read_file(self, name: str) -> Optional[bytes]:
        """Reassemble a file by concatenating its chunks in append order."""
        with self.lock:
            file = self._files.get(name)
            if file is None:
                return None
            return b"".join(chunk.data for chunk in file.chunks)

    def file_type(self, name: str) -> Optional[str]:
        with self.lock:
            file = self._files.get(name)
            return file.file_type if file is not None else None

    def file_size(self, name: str) -> int:
        with self.lock:
            file = self._files.get(name)
            return file.total_size if file is not None else 0

    def metadata(self, name: str) -> Optional[File]:
        with self.lock:
            file = self._files.get(name)
            return file.copy() if file is not None else None

    def storage_usage(self) -> int:
        """Sum total_size over every file, recomputed on each call."""
        with self.lock:
            return sum(file.total_size for file in self._files.values())

    def associate_with_project(self, name: str, project_id: str) -> bool:
        with self.lock:
            file = self._files.get(name)
            if file is None:
                return False
            previous = file.project_id
            file.project_id = project_id
            logger.debug(f"Associated '{name}' with project '{project_id}' (was {previous!r})")
            return True

    def delete(self, name: str) -> bool:
        with self.lock:
            removed = self._files.pop(name, None)
            return removed is not None

    def files(self) -> Iterator[File]:
        """Iterate over detached copies of every file, for snapshots."""
        with self.lock:
            copies = [file.copy() for file in self._files.values()]
        return iter(copies)

    def __len__(self) -> int:
        with self.lock:
            return len(self._files)
