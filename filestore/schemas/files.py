"""Pydantic schemas for file operation endpoints."""

from typing import List, Optional
from pydantic import BaseModel

from filestore.domain import File, FileSummary
from filestore.utils import encode_bytes


class FileSummaryResponse(BaseModel):
    """Response model for one entry of the file listing."""
    name: str
    size: int
    file_type: str
    project_id: Optional[str] = None
    uploaded_at: int

    @classmethod
    def from_summary(cls, summary: FileSummary) -> "FileSummaryResponse":
        return cls(
            name=summary.name,
            size=summary.size,
            file_type=summary.file_type,
            project_id=summary.project_id,
            uploaded_at=summary.uploaded_at,
        )


class ListFilesResponse(BaseModel):
    """Response model for file listing."""
    files: List[FileSummaryResponse]


class ChunkRecordResponse(BaseModel):
    """A stored chunk; data is base64-encoded."""
    index: int
    size: int
    data: str


class FileRecordResponse(BaseModel):
    """Full file record including its chunks in append order."""
    name: str
    chunks: List[ChunkRecordResponse]
    total_size: int
    file_type: str
    project_id: Optional[str] = None
    uploaded_at: int

    @classmethod
    def from_file(cls, file: File) -> "FileRecordResponse":
        return cls(
            name=file.name,
            chunks=[
                ChunkRecordResponse(index=chunk.index, size=chunk.size, data=encode_bytes(chunk.data))
                for chunk in file.chunks
            ],
            total_size=file.total_size,
            file_type=file.file_type,
            project_id=file.project_id,
            uploaded_at=file.uploaded_at,
        )


class FileExistsResponse(BaseModel):
    """Response model for existence check."""
    name: str
    exists: bool


class ChunkCountResponse(BaseModel):
    """Response model for chunk count."""
    name: str
    chunk_count: int


class ChunkDataResponse(BaseModel):
    """Response model for a single chunk lookup; data is null when absent."""
    name: str
    index: int
    data: Optional[str] = None


class FileTypeResponse(BaseModel):
    """Response model for file type lookup; file_type is null when absent."""
    name: str
    file_type: Optional[str] = None


class FileMetadataResponse(BaseModel):
    """Response model for metadata lookup; file is null when absent."""
    file: Optional[FileRecordResponse] = None


class DeleteFileResponse(BaseModel):
    """Response model for file deletion."""
    name: str
    deleted: bool


class StorageUsageResponse(BaseModel):
    """Response model for storage usage."""
    total_bytes: int
