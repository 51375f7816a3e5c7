"""Configuration settings for the file store server."""

import os
from common.constants import ANONYMOUS_IDENTITY, DEFAULT_PORT


FILESTORE_HOST = os.environ.get("FILESTORE_HOST", "0.0.0.0")

FILESTORE_PORT = int(os.environ.get("FILESTORE_PORT", str(DEFAULT_PORT)))

SNAPSHOT_PATH = os.environ.get("FILESTORE_SNAPSHOT_PATH", "/app/data/filestore_snapshot.json")

# Seconds between background snapshots; 0 disables the periodic task.
SNAPSHOT_INTERVAL_SECONDS = int(os.environ.get("FILESTORE_SNAPSHOT_INTERVAL", "300"))

# Quotas in bytes; 0 means unlimited.
MAX_FILE_BYTES = int(os.environ.get("FILESTORE_MAX_FILE_BYTES", "0"))

MAX_OWNER_BYTES = int(os.environ.get("FILESTORE_MAX_OWNER_BYTES", "0"))

ANONYMOUS_PRINCIPAL = os.environ.get("FILESTORE_ANONYMOUS_IDENTITY", ANONYMOUS_IDENTITY)

REQUIRE_AUTH = os.environ.get("FILESTORE_REQUIRE_AUTH", "false").lower() in ("1", "true", "yes")

RENEWABLE_PROJECTS = (
    "Solar Farm Initiative",
    "Wind Energy Cooperative",
    "Hydroelectric Microgrid",
)
