"""Command handler functions for CLI operations."""

from pathlib import Path
from typing import Optional

from common.logging_config import get_logger
from cli.models import (
    AssociateCommand,
    ChunksCommand,
    CommandRequest,
    CommandResult,
    DeleteCommand,
    DownloadCommand,
    InfoCommand,
    ListCommand,
    ListProjectCommand,
    RenewableCommand,
    UploadCommand,
    UsageCommand,
    UseIdentityCommand,
    WhoAmICommand,
)
from cli.config import Config
from cli.filestore_client import FileStoreClient

logger = get_logger(__name__)


_client: Optional[FileStoreClient] = None


def get_client() -> FileStoreClient:
    """
    Get or create global FileStoreClient instance.

    Returns:
        FileStoreClient instance
    """
    global _client
    if _client is None:
        logger.debug("Creating new FileStoreClient instance")
        config = Config(Path.home() / '.filestore' / 'config.json')
        _client = FileStoreClient(config)
    return _client


def handle_whoami(cmd: WhoAmICommand, client: Optional[FileStoreClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.whoami()


def handle_use(cmd: UseIdentityCommand, client: Optional[FileStoreClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.use_identity(cmd.identity)


def handle_upload(cmd: UploadCommand, client: Optional[FileStoreClient] = None) -> str:
    """
    Handle 'upload' command.

    Args:
        cmd: UploadCommand with path and optional type, project and replace flag
        client: Optional FileStoreClient for dependency injection (testing)

    Returns:
        Success or error message
    """
    logger.info(f"Executing upload command: path={cmd.path} replace={cmd.replace}")
    if client is None:
        client = get_client()
    return client.upload(cmd.path, file_type=cmd.file_type, project_id=cmd.project_id, replace=cmd.replace)


def handle_list(cmd: ListCommand, client: Optional[FileStoreClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.list_files()


def handle_list_project(cmd: ListProjectCommand, client: Optional[FileStoreClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.list_project(cmd.project_id)


def handle_info(cmd: InfoCommand, client: Optional[FileStoreClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.file_info(cmd.name)


def handle_chunks(cmd: ChunksCommand, client: Optional[FileStoreClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.chunk_count(cmd.name)


def handle_download(cmd: DownloadCommand, client: Optional[FileStoreClient] = None) -> str:
    """
    Handle 'download' command.

    Args:
        cmd: DownloadCommand with name and optional output_path
        client: Optional FileStoreClient for dependency injection (testing)

    Returns:
        Success or error message with download results
    """
    logger.info(f"Executing download command: name={cmd.name} output_path={cmd.output_path}")
    if client is None:
        client = get_client()
    return client.download(cmd.name, cmd.output_path)


def handle_delete(cmd: DeleteCommand, client: Optional[FileStoreClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.delete(cmd.name)


def handle_associate(cmd: AssociateCommand, client: Optional[FileStoreClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.associate(cmd.name, cmd.project_id)


def handle_usage(cmd: UsageCommand, client: Optional[FileStoreClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.usage()


def handle_renewable(cmd: RenewableCommand, client: Optional[FileStoreClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.renewable_projects()


HANDLERS = {
    WhoAmICommand: handle_whoami,
    UseIdentityCommand: handle_use,
    UploadCommand: handle_upload,
    ListCommand: handle_list,
    ListProjectCommand: handle_list_project,
    InfoCommand: handle_info,
    ChunksCommand: handle_chunks,
    DownloadCommand: handle_download,
    DeleteCommand: handle_delete,
    AssociateCommand: handle_associate,
    UsageCommand: handle_usage,
    RenewableCommand: handle_renewable,
}


def dispatch_command(cmd_obj: CommandRequest, client: Optional[FileStoreClient] = None) -> CommandResult:
    """Dispatch parsed command to appropriate handler."""
    handler = HANDLERS.get(type(cmd_obj))
    if handler is None:
        return CommandResult(f"Unknown command type: {type(cmd_obj)}", ok=False)
    return handler(cmd_obj, client=client)
