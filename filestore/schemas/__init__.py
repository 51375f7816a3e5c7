"""Pydantic schemas for API requests and responses."""

from filestore.schemas.files import (
    ChunkCountResponse,
    ChunkDataResponse,
    ChunkRecordResponse,
    DeleteFileResponse,
    FileExistsResponse,
    FileMetadataResponse,
    FileRecordResponse,
    FileSummaryResponse,
    FileTypeResponse,
    ListFilesResponse,
    StorageUsageResponse
)
from filestore.schemas.projects import (
    AssociateProjectRequest,
    AssociateProjectResponse,
    ProjectFilesResponse,
    RenewableProjectsResponse
)
from filestore.schemas.common import ErrorResponse

__all__ = [
    "ChunkCountResponse",
    "ChunkDataResponse",
    "ChunkRecordResponse",
    "DeleteFileResponse",
    "FileExistsResponse",
    "FileMetadataResponse",
    "FileRecordResponse",
    "FileSummaryResponse",
    "FileTypeResponse",
    "ListFilesResponse",
    "StorageUsageResponse",
    "AssociateProjectRequest",
    "AssociateProjectResponse",
    "ProjectFilesResponse",
    "RenewableProjectsResponse",
    "ErrorResponse"
]
