"""File service for business logic."""

from typing import List, Optional

from common.logging_config import get_logger
from filestore import config
from filestore.auth import ensure_authenticated
from filestore.domain import File, FileSummary
from filestore.file_table import FileTable
from filestore.owner_directory import OwnerDirectory
from filestore.quota import check_quota
from filestore.service_locator import get_owner_directory

logger = get_logger(__name__)


class FileService:
    """
    Operations on the caller's own files.

    Every method takes the caller identity first and resolves (or lazily
    creates) that owner's table before doing anything else. Lookups report
    absence as None, False or 0 instead of raising.
    """

    def __init__(
        self,
        directory: Optional[OwnerDirectory] = None,
        max_file_bytes: Optional[int] = None,
        max_owner_bytes: Optional[int] = None,
        require_auth: Optional[bool] = None,
    ):
        self.directory = directory if directory is not None else get_owner_directory()
        self.max_file_bytes = config.MAX_FILE_BYTES if max_file_bytes is None else max_file_bytes
        self.max_owner_bytes = config.MAX_OWNER_BYTES if max_owner_bytes is None else max_owner_bytes
        self.require_auth = config.REQUIRE_AUTH if require_auth is None else require_auth

    def _table_for(self, identity: str) -> FileTable:
        if self.require_auth:
            ensure_authenticated(identity)
        return self.directory.resolve(identity)

    def check_file_exists(self, identity: str, name: str) -> bool:
        return self._table_for(identity).exists(name)

    def upload_file_chunk(
        self,
        identity: str,
        name: str,
        data: bytes,
        index: int,
        file_type: str,
        project_id: Optional[str] = None,
    ) -> None:
        """
        Append one chunk to a file, creating the file on its first chunk.

        Raises:
            FileTooLargeError: If the per-file limit would be exceeded
            OwnerQuotaExceededError: If the per-owner limit would be exceeded
        """
        table = self._table_for(identity)
        with table.lock:
            check_quota(table, name, len(data), self.max_file_bytes, self.max_owner_bytes)
            table.append_chunk(name, data, index, file_type, project_id)
            chunk_count = table.chunk_count(name)

        logger.info(
            f"Stored chunk index={index} size={len(data)} for '{name}' "
            f"(chunks={chunk_count}) [identity={identity}]"
        )

    def get_files(self, identity: str) -> List[FileSummary]:
        files = self._table_for(identity).list_metadata()
        logger.debug(f"Listed {len(files)} files [identity={identity}]")
        return files

    def get_total_chunks(self, identity: str, name: str) -> int:
        return self._table_for(identity).chunk_count(name)

    def get_file_chunk(self, identity: str, name: str, index: int) -> Optional[bytes]:
        data = self._table_for(identity).read_chunk(name, index)
        if data is None:
            logger.debug(f"Chunk index={index} of '{name}' not found [identity={identity}]")
        return data

    def download_file(self, identity: str, name: str) -> Optional[bytes]:
        data = self._table_for(identity).read_file(name)
        if data is not None:
            logger.info(f"Reassembled '{name}' ({len(data)} bytes) [identity={identity}]")
        return data

    def get_file_type(self, identity: str, name: str) -> Optional[str]:
        return self._table_for(identity).file_type(name)

    def get_file_metadata(self, identity: str, name: str) -> Optional[File]:
        return self._table_for(identity).metadata(name)

    def get_storage_usage(self, identity: str) -> int:
        return self._table_for(identity).storage_usage()

    def delete_file(self, identity: str, name: str) -> bool:
        deleted = self._table_for(identity).delete(name)
        if deleted:
            logger.info(f"Deleted file '{name}' [identity={identity}]")
        else:
            logger.info(f"Delete skipped, file '{name}' not found [identity={identity}]")
        return deleted
