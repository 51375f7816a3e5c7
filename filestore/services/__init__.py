"""Service layer for business logic."""

from filestore.services.file_service import FileService
from filestore.services.project_service import ProjectService

__all__ = [
    "FileService",
    "ProjectService",
]
