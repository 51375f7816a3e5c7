"""JSON snapshot of the owner directory, written and restored at lifecycle boundaries."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from common.logging_config import get_logger
from filestore.config import SNAPSHOT_PATH
from filestore.domain import Chunk, File
from filestore.exceptions import SnapshotError
from filestore.file_table import FileTable
from filestore.owner_directory import OwnerDirectory
from filestore.utils import decode_bytes, encode_bytes

logger = get_logger(__name__)

SNAPSHOT_FORMAT_VERSION = 1


def file_to_dict(file: File) -> Dict[str, Any]:
    """
    Serialize a File into a JSON-compatible dict.

    Chunk data is base64-encoded; chunks stay in append order.
    """
    return {
        'name': file.name,
        'file_type': file.file_type,
        'project_id': file.project_id,
        'uploaded_at': file.uploaded_at,
        'total_size': file.total_size,
        'chunks': [
            {'index': chunk.index, 'data': encode_bytes(chunk.data)}
            for chunk in file.chunks
        ],
    }


def file_from_dict(data: Dict[str, Any]) -> File:
    """Rebuild a File from file_to_dict output."""
    return File(
        name=data['name'],
        file_type=data['file_type'],
        project_id=data.get('project_id'),
        uploaded_at=int(data['uploaded_at']),
        total_size=int(data['total_size']),
        chunks=[
            Chunk(data=decode_bytes(chunk['data']), index=int(chunk['index']))
            for chunk in data.get('chunks', [])
        ],
    )


def directory_to_dict(directory: OwnerDirectory) -> Dict[str, Any]:
    owners = {}
    for identity in directory.identities():
        table = directory.get(identity)
        if table is None:
            continue
        owners[identity] = {file.name: file_to_dict(file) for file in table.files()}
    return {'version': SNAPSHOT_FORMAT_VERSION, 'owners': owners}


def directory_from_dict(data: Dict[str, Any]) -> OwnerDirectory:
    if not isinstance(data, dict) or 'owners' not in data:
        raise SnapshotError("Snapshot is missing the 'owners' section")

    version = data.get('version')
    if version != SNAPSHOT_FORMAT_VERSION:
        raise SnapshotError(f"Unsupported snapshot version: {version}")

    tables = {}
    for identity, files in data['owners'].items():
        tables[identity] = FileTable(
            {name: file_from_dict(file_data) for name, file_data in files.items()}
        )
    return OwnerDirectory(tables)


class SnapshotStore:
    """
    Reads and writes the owner directory snapshot file.
    """

    def __init__(self, path: Optional[Path] = None):
        """
        Args:
            path: Snapshot file location (default: FILESTORE_SNAPSHOT_PATH)
        """
        self.path = Path(path) if path is not None else Path(SNAPSHOT_PATH)

    def load(self) -> OwnerDirectory:
        """
        Restore the owner directory from disk.

        Returns:
            The restored directory, or an empty one when no snapshot exists

        Raises:
            SnapshotError: If the snapshot file is unreadable or corrupted
        """
        if not self.path.exists():
            logger.warning(f"Snapshot not found at {self.path}, starting with an empty store")
            return OwnerDirectory()

        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
            directory = directory_from_dict(data)
        except SnapshotError:
            raise
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Failed to restore snapshot from {self.path}: {e}")
            raise SnapshotError(f"Cannot restore snapshot {self.path}: {e}") from e

        logger.info(
            f"Restored {directory.file_count()} files for {directory.owner_count()} owners from {self.path}"
        )
        return directory

    def save(self, directory: OwnerDirectory) -> None:
        """
        Persist the owner directory, replacing the previous snapshot atomically.

        Raises:
            SnapshotError: If the snapshot cannot be written
        """
        data = directory_to_dict(directory)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, 'w') as f:
                    json.dump(data, f)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.error(f"Failed to write snapshot to {self.path}: {e}")
            raise SnapshotError(f"Cannot write snapshot {self.path}: {e}") from e

        logger.info(f"Saved snapshot of {len(data['owners'])} owners to {self.path}")

    def is_writable(self) -> bool:
        """Check that the snapshot directory exists (or can be created) and is writable."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return os.access(self.path.parent, os.W_OK)
