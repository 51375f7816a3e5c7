"""Project API routes."""

from fastapi import APIRouter, Depends

from filestore.auth import get_current_identity
from filestore.schemas.files import FileRecordResponse
from filestore.schemas.projects import ProjectFilesResponse, RenewableProjectsResponse
from filestore.services.project_service import ProjectService

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("/renewable", response_model=RenewableProjectsResponse)
async def get_renewable_projects(current_identity: str = Depends(get_current_identity)):
    """
    Catalogue of renewable projects.

    Raises:
        - 401: Anonymous caller
    """
    project_service = ProjectService()
    return RenewableProjectsResponse(projects=project_service.get_renewable_projects(current_identity))


@router.get("/{project_id:path}/files", response_model=ProjectFilesResponse)
async def get_files_by_project(project_id: str, current_identity: str = Depends(get_current_identity)):
    """
    Full records of the caller's files associated with project_id (exact match).
    """
    project_service = ProjectService()

    files = project_service.get_files_by_project(current_identity, project_id)

    return ProjectFilesResponse(
        project_id=project_id,
        files=[FileRecordResponse.from_file(file) for file in files],
    )
