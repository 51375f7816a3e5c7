"""Command parser for CLI input."""

import shlex
from typing import Optional

from cli.models import (
    AssociateCommand,
    ChunksCommand,
    CommandRequest,
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


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        One of the command dataclasses from cli.models

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]
    args = tokens[1:]

    if command_name == "whoami":
        _expect_args(command_name, args, 0)
        return WhoAmICommand()
    elif command_name == "use":
        return _parse_use(args)
    elif command_name == "upload":
        return _parse_upload(args)
    elif command_name == "list":
        _expect_args(command_name, args, 0)
        return ListCommand()
    elif command_name == "list-project":
        _expect_args(command_name, args, 1, "<project_id>")
        return ListProjectCommand(project_id=args[0])
    elif command_name == "info":
        _expect_args(command_name, args, 1, "<name>")
        return InfoCommand(name=args[0])
    elif command_name == "chunks":
        _expect_args(command_name, args, 1, "<name>")
        return ChunksCommand(name=args[0])
    elif command_name == "download":
        return _parse_download(args)
    elif command_name == "delete":
        _expect_args(command_name, args, 1, "<name>")
        return DeleteCommand(name=args[0])
    elif command_name == "associate":
        _expect_args(command_name, args, 2, "<name> <project_id>")
        return AssociateCommand(name=args[0], project_id=args[1])
    elif command_name == "usage":
        _expect_args(command_name, args, 0)
        return UsageCommand()
    elif command_name == "renewable":
        _expect_args(command_name, args, 0)
        return RenewableCommand()
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _expect_args(command_name: str, args: list[str], count: int, usage: str = "") -> None:
    if len(args) != count:
        if count == 0:
            raise ParseError(f"{command_name} takes no arguments")
        raise ParseError(f"{command_name} requires exactly {count} argument(s): {usage}")


def _parse_use(args: list[str]) -> UseIdentityCommand:
    """Parse 'use <identity>' or 'use --anonymous'."""
    if len(args) != 1:
        raise ParseError("use requires exactly 1 argument: <identity> or --anonymous")

    if args[0] == "--anonymous":
        return UseIdentityCommand(identity=None)
    return UseIdentityCommand(identity=args[0])


def _parse_upload(args: list[str]) -> UploadCommand:
    """Parse 'upload <path> [--type T] [--project P] [--replace]'."""
    path: Optional[str] = None
    file_type: Optional[str] = None
    project_id: Optional[str] = None
    replace = False

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--type", "--project"):
            if i + 1 >= len(args):
                raise ParseError(f"{arg} requires a value")
            if arg == "--type":
                file_type = args[i + 1]
            else:
                project_id = args[i + 1]
            i += 2
            continue
        if arg == "--replace":
            replace = True
        elif arg.startswith("--"):
            raise ParseError(f"Unknown option for upload: {arg}")
        elif path is None:
            path = arg
        else:
            raise ParseError("upload accepts a single file path")
        i += 1

    if path is None:
        raise ParseError("upload requires a file path")

    return UploadCommand(path=path, file_type=file_type, project_id=project_id, replace=replace)


def _parse_download(args: list[str]) -> DownloadCommand:
    """Parse 'download <name> [output_path]' command."""
    if not 1 <= len(args) <= 2:
        raise ParseError("download requires 1 or 2 arguments: <name> [output_path]")

    name = args[0]
    output_path = args[1] if len(args) > 1 else None

    return DownloadCommand(name=name, output_path=output_path)
