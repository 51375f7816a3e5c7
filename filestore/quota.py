"""Storage limit checks applied before a chunk is appended."""

from common.logging_config import get_logger
from filestore.exceptions import FileTooLargeError, OwnerQuotaExceededError
from filestore.file_table import FileTable

logger = get_logger(__name__)


def check_quota(
    table: FileTable,
    name: str,
    size_bytes: int,
    max_file_bytes: int,
    max_owner_bytes: int,
) -> None:
    """Check that appending size_bytes to name stays within the limits.

    Must be called while holding ``table.lock`` so the check and the
    following append see the same state. A limit of 0 disables it.

    Args:
        table: Owner's file table.
        name: File receiving the chunk.
        size_bytes: Size of the chunk about to be appended.
        max_file_bytes: Per-file limit in bytes.
        max_owner_bytes: Per-owner limit in bytes.

    Raises:
        FileTooLargeError: If the file would exceed max_file_bytes.
        OwnerQuotaExceededError: If the owner would exceed max_owner_bytes.
    """
    if max_file_bytes > 0:
        current = table.file_size(name)
        if current + size_bytes > max_file_bytes:
            logger.warning(
                f"File limit exceeded for '{name}': need {size_bytes}, have {max_file_bytes - current} available"
            )
            raise FileTooLargeError(
                f"File '{name}' would exceed the per-file limit of {max_file_bytes} bytes",
                limit_bytes=max_file_bytes,
                used_bytes=current,
                required_bytes=size_bytes,
            )

    if max_owner_bytes > 0:
        used = table.storage_usage()
        if used + size_bytes > max_owner_bytes:
            logger.warning(
                f"Owner quota exceeded: need {size_bytes}, have {max_owner_bytes - used} available"
            )
            raise OwnerQuotaExceededError(
                f"Upload would exceed the storage quota of {max_owner_bytes} bytes",
                limit_bytes=max_owner_bytes,
                used_bytes=used,
                required_bytes=size_bytes,
            )
