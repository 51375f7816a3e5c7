"""Project-wide constants shared by the server and the CLI."""

DEFAULT_PORT: int = 8000

DEFAULT_CHUNK_SIZE_BYTES: int = 1024 * 1024  # 1 MiB client upload chunks

# Textual form of the anonymous principal handed over by the identity layer.
ANONYMOUS_IDENTITY: str = "2vxsx-fae"

DEFAULT_FILE_TYPE: str = "application/octet-stream"
