"""File operation API routes."""

from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import Response

from filestore.auth import get_current_identity
from filestore.schemas.files import (
    ChunkCountResponse,
    ChunkDataResponse,
    DeleteFileResponse,
    FileExistsResponse,
    FileMetadataResponse,
    FileRecordResponse,
    FileSummaryResponse,
    FileTypeResponse,
    ListFilesResponse,
    StorageUsageResponse
)
from filestore.schemas.projects import AssociateProjectRequest, AssociateProjectResponse
from filestore.services.file_service import FileService
from filestore.services.project_service import ProjectService
from filestore.utils import encode_bytes

router = APIRouter(prefix="/files", tags=["Files"])

storage_router = APIRouter(prefix="/storage", tags=["Storage"])


@router.get("", response_model=ListFilesResponse)
async def get_files(current_identity: str = Depends(get_current_identity)):
    """
    List metadata for every file owned by the caller.

    Returns:
        - files: name, size, file_type, project_id, uploaded_at per file
    """
    file_service = FileService()

    files = file_service.get_files(current_identity)

    return ListFilesResponse(files=[FileSummaryResponse.from_summary(f) for f in files])


@router.post("/{name:path}/chunks", status_code=status.HTTP_204_NO_CONTENT)
async def upload_file_chunk(
    name: str,
    chunk: UploadFile = File(...),
    index: int = Form(..., ge=0),
    file_type: str = Form(...),
    project_id: Optional[str] = Form(None),
    current_identity: str = Depends(get_current_identity)
):
    """
    Append one chunk to a file, creating the file on its first chunk.

    Parameters:
        - chunk: Chunk bytes (multipart/form-data)
        - index: Caller-supplied chunk position (not validated for order or uniqueness)
        - file_type: MIME-like label; the latest upload wins
        - project_id: Optional project, only used when the file is created

    Raises:
        - 401: Malformed Authorization header
        - 507: Per-file or per-owner quota exceeded
    """
    file_service = FileService()

    data = await chunk.read()

    file_service.upload_file_chunk(
        current_identity,
        name=name,
        data=data,
        index=index,
        file_type=file_type,
        project_id=project_id or None,
    )

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{name:path}/exists", response_model=FileExistsResponse)
async def check_file_exists(name: str, current_identity: str = Depends(get_current_identity)):
    file_service = FileService()
    return FileExistsResponse(name=name, exists=file_service.check_file_exists(current_identity, name))


@router.get("/{name:path}/chunks/count", response_model=ChunkCountResponse)
async def get_total_chunks(name: str, current_identity: str = Depends(get_current_identity)):
    """
    Number of stored chunks; 0 when the file does not exist.
    """
    file_service = FileService()
    return ChunkCountResponse(name=name, chunk_count=file_service.get_total_chunks(current_identity, name))


@router.get("/{name:path}/chunks/{index}", response_model=ChunkDataResponse)
async def get_file_chunk(name: str, index: int, current_identity: str = Depends(get_current_identity)):
    """
    Data of the earliest-appended chunk with this index.

    Returns:
        - data: base64-encoded bytes, or null when the file or index is absent
    """
    file_service = FileService()

    data = file_service.get_file_chunk(current_identity, name, index)

    return ChunkDataResponse(
        name=name,
        index=index,
        data=encode_bytes(data) if data is not None else None,
    )


@router.get("/{name:path}/type", response_model=FileTypeResponse)
async def get_file_type(name: str, current_identity: str = Depends(get_current_identity)):
    file_service = FileService()
    return FileTypeResponse(name=name, file_type=file_service.get_file_type(current_identity, name))


@router.get("/{name:path}/metadata", response_model=FileMetadataResponse)
async def get_file_metadata(name: str, current_identity: str = Depends(get_current_identity)):
    """
    Full file record, or file: null when absent.
    """
    file_service = FileService()

    file = file_service.get_file_metadata(current_identity, name)

    return FileMetadataResponse(file=FileRecordResponse.from_file(file) if file is not None else None)


@router.get("/{name:path}/download")
async def download_file(name: str, current_identity: str = Depends(get_current_identity)):
    """
    Reassembled file content, chunks concatenated in append order.

    Raises:
        - 404: File not found
    """
    file_service = FileService()

    data = file_service.download_file(current_identity, name)
    if data is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"File '{name}' not found"
        )

    file_type = file_service.get_file_type(current_identity, name)

    return Response(
        content=data,
        media_type=file_type or "application/octet-stream",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(name, safe='')}"}
    )


@router.put("/{name:path}/project", response_model=AssociateProjectResponse)
async def associate_with_project(
    name: str,
    request: AssociateProjectRequest,
    current_identity: str = Depends(get_current_identity)
):
    """
    Replace the project association of a file.

    Returns:
        - associated: false when the file does not exist
    """
    project_service = ProjectService()

    associated = project_service.associate_with_project(current_identity, name, request.project_id)

    return AssociateProjectResponse(name=name, project_id=request.project_id, associated=associated)


@router.delete("/{name:path}", response_model=DeleteFileResponse)
async def delete_file(name: str, current_identity: str = Depends(get_current_identity)):
    """
    Delete a file.

    Returns:
        - deleted: true only for the call that actually removed the file
    """
    file_service = FileService()
    return DeleteFileResponse(name=name, deleted=file_service.delete_file(current_identity, name))


@storage_router.get("/usage", response_model=StorageUsageResponse)
async def get_storage_usage(current_identity: str = Depends(get_current_identity)):
    """
    Total bytes stored by the caller across all files.
    """
    file_service = FileService()
    return StorageUsageResponse(total_bytes=file_service.get_storage_usage(current_identity))
