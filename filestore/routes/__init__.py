"""API routes package."""

from filestore.routes.file_routes import router as file_router
from filestore.routes.file_routes import storage_router
from filestore.routes.project_routes import router as project_router

__all__ = ["file_router", "storage_router", "project_router"]
