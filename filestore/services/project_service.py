"""Project service for business logic."""

from typing import List, Optional

from common.logging_config import get_logger
from filestore import config
from filestore.auth import ensure_authenticated
from filestore.domain import File
from filestore.file_table import FileTable
from filestore.owner_directory import OwnerDirectory
from filestore.service_locator import get_owner_directory

logger = get_logger(__name__)


class ProjectService:
    def __init__(
        self,
        directory: Optional[OwnerDirectory] = None,
        require_auth: Optional[bool] = None,
    ):
        self.directory = directory if directory is not None else get_owner_directory()
        self.require_auth = config.REQUIRE_AUTH if require_auth is None else require_auth

    def _table_for(self, identity: str) -> FileTable:
        if self.require_auth:
            ensure_authenticated(identity)
        return self.directory.resolve(identity)

    def associate_with_project(self, identity: str, name: str, project_id: str) -> bool:
        logger.info(f"Associating '{name}' with project '{project_id}' [identity={identity}]")
        associated = self._table_for(identity).associate_with_project(name, project_id)
        if not associated:
            logger.warning(f"Association failed: file '{name}' not found [identity={identity}]")
        return associated

    def get_files_by_project(self, identity: str, project_id: str) -> List[File]:
        files = self._table_for(identity).list_by_project(project_id)
        logger.info(f"Found {len(files)} files in project '{project_id}' [identity={identity}]")
        return files

    def get_renewable_projects(self, identity: str) -> List[str]:
        """
        Return the fixed catalogue of renewable projects.

        Raises:
            UnauthenticatedError: For the anonymous caller, regardless of require_auth
        """
        ensure_authenticated(identity)
        return list(config.RENEWABLE_PROJECTS)
