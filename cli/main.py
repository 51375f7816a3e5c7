"""CLI entry point.

Without arguments an interactive shell starts; otherwise the arguments are
run as a single command, e.g. ``filestore-cli upload notes.txt --project P1``.
"""

import os
import shlex
import sys

from common.logging_config import setup_logging
from cli.commands import get_client
from cli.repl import repl_loop, run_line


def main() -> None:
    """Entry point for CLI."""
    debug = '--debug' in sys.argv
    args = [arg for arg in sys.argv[1:] if arg != '--debug']

    # Quiet by default so log lines do not interleave with command output.
    logger = setup_logging('cli', log_level='DEBUG' if debug else os.getenv('LOG_LEVEL', 'WARNING'))
    if debug:
        logger.info("Debug logging enabled")

    if not args:
        logger.info("Starting interactive shell")
        repl_loop()
        return

    client = get_client()
    try:
        result = run_line(shlex.join(args), client=client)
    finally:
        client.close()

    print(result)
    if not result.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
