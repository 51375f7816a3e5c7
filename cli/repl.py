"""Interactive shell for the file store CLI."""

import os
import sys
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from cli.commands import dispatch_command, get_client
from cli.completer import FileStoreCompleter
from cli.constants import (
    HELP_TEXT,
    LOGO,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.filestore_client import FileStoreClient
from cli.models import CommandResult
from cli.parser import ParseError, parse_command

EXIT_WORDS = ("exit", "quit")


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    os.system("cls" if sys.platform == "win32" else "clear")


def show_welcome() -> None:
    print(LOGO)
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def build_prompt(client: FileStoreClient) -> list:
    """Prompt fragments showing which principal the next command runs as."""
    identity = client.config.get_identity() or "anonymous"
    return [
        ("class:prompt", PROMPT_TEXT.rstrip("> ")),
        ("class:command", f"[{identity}]"),
        ("class:prompt", "> "),
    ]


def run_line(line: str, client: Optional[FileStoreClient] = None) -> CommandResult:
    """
    Parse and execute one command line.

    Args:
        line: Raw command text, e.g. "upload notes.txt --project P1"
        client: Optional FileStoreClient for dependency injection (testing)

    Returns:
        Text to show the user, with ok False when the command failed.
        Parse failures are reported, not raised.
    """
    try:
        cmd_obj = parse_command(line)
    except ParseError as e:
        return CommandResult(f"Error: {e}", ok=False)
    result = dispatch_command(cmd_obj, client=client)
    return result if isinstance(result, CommandResult) else CommandResult(result)


def repl_loop(client: Optional[FileStoreClient] = None) -> None:
    """Start interactive REPL with prompt_toolkit."""
    if client is None:
        client = get_client()

    session: PromptSession = PromptSession(
        completer=FileStoreCompleter(), history=InMemoryHistory(), style=STYLE
    )

    clear_screen()
    show_welcome()

    try:
        while True:
            try:
                user_input = session.prompt(build_prompt(client)).strip()
            except KeyboardInterrupt:
                continue
            except EOFError:
                print("\nGoodbye!")
                break

            if not user_input:
                continue
            if user_input in EXIT_WORDS:
                print("Goodbye!")
                break
            if user_input == "help":
                print(HELP_TEXT)
                continue
            if user_input == "clear":
                clear_screen()
                show_welcome()
                continue

            print(run_line(user_input, client=client))
    finally:
        client.close()
