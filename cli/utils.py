"""Utility functions for CLI operations."""

import mimetypes
import sys
from datetime import datetime, timezone
from typing import Iterator

from cli.constants import GREEN, RESET
from common.constants import DEFAULT_FILE_TYPE


def iter_file_chunks(file_path: str, chunk_size: int) -> Iterator[bytes]:
    """
    Read a local file in fixed-size pieces.

    Args:
        file_path: Path to the file to read
        chunk_size: Bytes per piece

    Yields:
        Consecutive pieces of the file
    """
    with open(file_path, 'rb') as f:
        while True:
            piece = f.read(chunk_size)
            if not piece:
                break
            yield piece


def show_progress(filename: str, sent: int, total: int) -> None:
    """Display current upload progress to stdout."""
    progress = (sent / total) * 100 if total else 100.0
    sys.stdout.write(
        f"\rUploading {filename}: {format_file_size(sent)} / {format_file_size(total)} ({GREEN}{progress:.1f}%{RESET})"
    )
    if sent >= total:
        sys.stdout.write('\n')
    sys.stdout.flush()


def guess_file_type(file_path: str) -> str:
    """Guess a MIME type from the file name, defaulting to octet-stream."""
    file_type, _ = mimetypes.guess_type(file_path)
    return file_type or DEFAULT_FILE_TYPE


def format_timestamp(timestamp_ns: int) -> str:
    """Format an upload timestamp (nanoseconds since epoch) as UTC ISO text."""
    moment = datetime.fromtimestamp(timestamp_ns / 1_000_000_000, tz=timezone.utc)
    return moment.strftime('%Y-%m-%d %H:%M:%S UTC')


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable format with appropriate unit.

    Uses binary units (1024-based) and automatically selects the most
    appropriate unit (B, KiB, MiB, GiB, TiB).

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string with size and unit (e.g., "1.50 MiB", "512 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    units = ['KiB', 'MiB', 'GiB', 'TiB']
    size = size_bytes / 1024.0

    for unit in units:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} PiB"
