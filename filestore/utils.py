"""Utility helper functions for the file store."""

import base64
import time
import uuid


def generate_request_id() -> str:
    """
    Generate a new UUID4 string for request tracing.

    Returns:
        UUID4 string
    """
    return str(uuid.uuid4())


def get_current_timestamp() -> int:
    """
    Get current time as integer nanoseconds since the Unix epoch.

    Returns:
        Current timestamp in nanoseconds
    """
    return time.time_ns()


def encode_bytes(data: bytes) -> str:
    """Encode raw bytes as base64 text for JSON payloads."""
    return base64.b64encode(data).decode('ascii')


def decode_bytes(text: str) -> bytes:
    """Decode base64 text produced by encode_bytes."""
    return base64.b64decode(text.encode('ascii'), validate=True)
