"""Custom exception classes for the file store."""


class FileStoreException(Exception):
    """
    Base exception class for all file store errors.
    """
    pass


class UnauthenticatedError(FileStoreException):
    """
    Raised when an anonymous caller invokes an operation that requires an identity.
    """
    pass


class InvalidAuthorizationHeaderError(FileStoreException):
    """
    Raised when the Authorization header is present but malformed.
    """
    pass


class QuotaExceededError(FileStoreException):
    """
    Raised when a chunk append would exceed a configured storage limit.
    """

    def __init__(self, message: str, limit_bytes: int, used_bytes: int, required_bytes: int):
        super().__init__(message)
        self.limit_bytes = limit_bytes
        self.used_bytes = used_bytes
        self.required_bytes = required_bytes


class FileTooLargeError(QuotaExceededError):
    """
    Raised when a single file would grow beyond the per-file limit.
    """
    pass


class OwnerQuotaExceededError(QuotaExceededError):
    """
    Raised when an owner's total usage would grow beyond the per-owner limit.
    """
    pass


class SnapshotError(FileStoreException):
    """
    Raised when a snapshot cannot be read or written.
    """
    pass
