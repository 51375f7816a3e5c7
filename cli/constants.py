"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = [
    "whoami", "use", "upload", "list", "list-project", "info", "chunks",
    "download", "delete", "associate", "usage", "renewable", "clear", "exit", "help",
]

STYLE = Style.from_dict(
    {
        "prompt": "#2E9E5B bold",
        "command": "#0088ff bold",
    }
)

GREEN = "\033[38;2;46;158;91m"
RESET = "\033[0m"

LOGO = f"""{GREEN}
  ┏━╸╻╻  ┏━╸┏━┓╺┳╸┏━┓┏━┓┏━╸
  ┣╸ ┃┃  ┣╸ ┗━┓ ┃ ┃ ┃┣┳┛┣╸
  ╹  ╹┗━╸┗━╸┗━┛ ╹ ┗━┛╹┗╸┗━╸
{RESET}"""

WELCOME_TITLE = "File Store CLI - Multi-tenant chunked file store"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "filestore> "

DOWNLOADS_DIR = "downloads"

HELP_TEXT = """Available commands:
  whoami                                       Show the identity in use
  use <identity> | use --anonymous             Act as another principal
  upload <path> [--type T] [--project P] [--replace]
                                               Upload a local file in chunks
  list                                         List your files
  list-project <project_id>                    List files associated with a project
  info <name>                                  Show metadata of a file
  chunks <name>                                Show the number of stored chunks
  download <name> [output_path]                Download and reassemble a file
  delete <name>                                Delete a file
  associate <name> <project_id>                Associate a file with a project
  usage                                        Show total bytes stored
  renewable                                    List renewable projects (requires identity)
  clear                                        Clear screen and redisplay welcome message
  help                                         Show this help
  exit                                         Exit REPL

Uploading to an existing name appends chunks; use --replace to start over.
Examples:
  use alice-principal
  upload reports/q1.csv --type text/csv --project Proj1
  associate q1.csv Proj2
  download q1.csv downloads/q1-copy.csv"""
