"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class WhoAmICommand:
    """Show the identity in use."""

    command: Literal["whoami"] = "whoami"


@dataclass(frozen=True)
class UseIdentityCommand:
    """Switch identity; None means anonymous."""

    identity: Optional[str]
    command: Literal["use"] = "use"


@dataclass(frozen=True)
class UploadCommand:
    """Upload a local file as a sequence of chunks."""

    path: str
    file_type: Optional[str] = None
    project_id: Optional[str] = None
    replace: bool = False
    command: Literal["upload"] = "upload"


@dataclass(frozen=True)
class ListCommand:
    """List the caller's files."""

    command: Literal["list"] = "list"


@dataclass(frozen=True)
class ListProjectCommand:
    """List files associated with a project."""

    project_id: str
    command: Literal["list-project"] = "list-project"


@dataclass(frozen=True)
class InfoCommand:
    """Show file metadata."""

    name: str
    command: Literal["info"] = "info"


@dataclass(frozen=True)
class ChunksCommand:
    """Show chunk count of a file."""

    name: str
    command: Literal["chunks"] = "chunks"


@dataclass(frozen=True)
class DownloadCommand:
    """Download file by name."""

    name: str
    output_path: Optional[str] = None
    command: Literal["download"] = "download"


@dataclass(frozen=True)
class DeleteCommand:
    """Delete a file by name."""

    name: str
    command: Literal["delete"] = "delete"


@dataclass(frozen=True)
class AssociateCommand:
    """Associate a file with a project."""

    name: str
    project_id: str
    command: Literal["associate"] = "associate"


@dataclass(frozen=True)
class UsageCommand:
    """Show storage usage."""

    command: Literal["usage"] = "usage"


@dataclass(frozen=True)
class RenewableCommand:
    """List renewable projects."""

    command: Literal["renewable"] = "renewable"


CommandRequest = (
    WhoAmICommand
    | UseIdentityCommand
    | UploadCommand
    | ListCommand
    | ListProjectCommand
    | InfoCommand
    | ChunksCommand
    | DownloadCommand
    | DeleteCommand
    | AssociateCommand
    | UsageCommand
    | RenewableCommand
)


class CommandResult(str):
    """Text shown to the user, plus whether the command succeeded."""

    ok: bool

    def __new__(cls, message: str, ok: bool = True) -> "CommandResult":
        result = super().__new__(cls, message)
        result.ok = ok
        return result
