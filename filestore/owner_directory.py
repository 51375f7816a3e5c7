"""Process-wide mapping from owner identity to that owner's file table."""

import threading
from typing import Dict, List, Optional

from common.logging_config import get_logger
from filestore.file_table import FileTable

logger = get_logger(__name__)


class OwnerDirectory:
    """
    Lazily populated map identity -> FileTable.

    resolve() is a compare-and-insert under the directory lock, so
    concurrent first requests from the same owner share one table.
    The directory lock is never held while a table operation runs.
    """

    def __init__(self, tables: Optional[Dict[str, FileTable]] = None):
        self._tables: Dict[str, FileTable] = dict(tables) if tables else {}
        self._lock = threading.Lock()

    def resolve(self, identity: str) -> FileTable:
        """
        Return the table for identity, creating an empty one on first use.

        Args:
            identity: Opaque caller principal

        Returns:
            The owner's FileTable
        """
        table = self._tables.get(identity)
        if table is not None:
            return table

        with self._lock:
            table = self._tables.get(identity)
            if table is None:
                table = FileTable()
                self._tables[identity] = table
                logger.info(f"Created file table for new owner [identity={identity}]")
            return table

    def get(self, identity: str) -> Optional[FileTable]:
        """Return the table for identity without creating one."""
        return self._tables.get(identity)

    def identities(self) -> List[str]:
        with self._lock:
            return list(self._tables.keys())

    def owner_count(self) -> int:
        with self._lock:
            return len(self._tables)

    def file_count(self) -> int:
        with self._lock:
            tables = list(self._tables.values())
        return sum(len(table) for table in tables)
