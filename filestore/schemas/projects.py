"""Pydantic schemas for project endpoints."""

from typing import List
from pydantic import BaseModel, Field

from filestore.schemas.files import FileRecordResponse


class AssociateProjectRequest(BaseModel):
    """Request model for associating a file with a project."""
    project_id: str = Field(..., min_length=1)


class AssociateProjectResponse(BaseModel):
    """Response model for project association."""
    name: str
    project_id: str
    associated: bool


class ProjectFilesResponse(BaseModel):
    """Response model for files of one project."""
    project_id: str
    files: List[FileRecordResponse]


class RenewableProjectsResponse(BaseModel):
    """Response model for the renewable project catalogue."""
    projects: List[str]
